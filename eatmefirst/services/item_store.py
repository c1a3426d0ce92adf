"""Durable store for inventory items."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Any

import pydantic
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from eatmefirst.database import SessionLocal, init_db
from eatmefirst.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from eatmefirst.models import Category, InventoryItem, ItemStatus, ProductNutrition
from eatmefirst.schemas.product import NutritionFacts, ProductCreate, ProductUpdate

logger = logging.getLogger(__name__)

Fields = ProductCreate | ProductUpdate | Mapping[str, Any]


@dataclass
class StatusCounts:
    """Number of items in each lifecycle status."""

    active: int = 0
    consumed: int = 0
    expired: int = 0

    @property
    def total(self) -> int:
        return self.active + self.consumed + self.expired


def _to_utc(value: datetime | None) -> datetime | None:
    # Timestamps are stored as UTC; SQLite drops the offset on write
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(UTC)


def _validate(schema: type[pydantic.BaseModel], fields: Fields) -> pydantic.BaseModel:
    """Run fields through a pydantic schema, raising the core ValidationError."""
    if isinstance(fields, schema):
        return fields
    if isinstance(fields, pydantic.BaseModel):
        fields = fields.model_dump(exclude_unset=True)
    try:
        return schema.model_validate(dict(fields))
    except pydantic.ValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"]) or None
        raise ValidationError(f"{field}: {error['msg']}", field=field) from e


class ItemStore:
    """Keyed record of inventory items and their status.

    The store is constructed explicitly and must be initialized before use;
    every operation raises ``StoreUnavailableError`` until ``initialize()``
    has completed. Each write commits as a unit or is rolled back.

    ``set_status`` and ``expire_overdue`` are reserved for the lifecycle
    engine: nothing else may change an item's status. Timestamps are
    stored in UTC.
    """

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self._session_factory = session_factory
        self._db: Session | None = None

    @property
    def is_initialized(self) -> bool:
        return self._db is not None

    def initialize(self, create_schema: bool = True) -> None:
        """Open the session and make sure the tables exist. Safe to call twice."""
        if self._db is not None:
            return
        db = self._session_factory()
        if create_schema:
            init_db(bind=db.get_bind())
        self._db = db
        logger.info("Item store initialized")

    def close(self) -> None:
        if self._db is not None:
            self._db.close()
            self._db = None

    @property
    def db(self) -> Session:
        if self._db is None:
            raise StoreUnavailableError()
        return self._db

    def _commit(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

    # --- Writes ---

    def create(self, fields: Fields, created_at: datetime | None = None) -> int:
        """Insert a new active item and return its id.

        ``created_at`` defaults to the database clock.
        """
        db = self.db
        data = _validate(ProductCreate, fields)

        item = InventoryItem(
            name=data.name,
            image=data.image,
            expiry_date=data.expiry_date,
            category=data.category,
            quantity=data.quantity,
            notes=data.notes,
            status=ItemStatus.ACTIVE,
            consumed_at=None,
        )
        if created_at is not None:
            item.created_at = _to_utc(created_at)
        if data.nutrition is not None:
            item.nutrition = ProductNutrition(**data.nutrition.model_dump())
        db.add(item)
        self._commit()
        db.refresh(item)

        logger.info(f"Created item {item.id} '{item.name}' expiring {item.expiry_date}")
        return item.id

    def update(self, item_id: int, fields: Fields) -> None:
        """Change only the supplied fields. Status and timestamps are left alone."""
        data = _validate(ProductUpdate, fields)
        item = self.get_or_raise(item_id)

        changes = data.model_dump(exclude_unset=True)
        if "nutrition" in changes:
            nutrition: NutritionFacts | None = data.nutrition
            if nutrition is None:
                item.nutrition = None
            elif item.nutrition is None:
                item.nutrition = ProductNutrition(**nutrition.model_dump())
            else:
                for key, value in nutrition.model_dump().items():
                    setattr(item.nutrition, key, value)
            del changes["nutrition"]

        for key in changes:
            setattr(item, key, getattr(data, key))

        self._commit()
        logger.info(f"Updated item {item_id}: {sorted(data.model_fields_set)}")

    def delete(self, item_id: int) -> None:
        """Remove an item permanently, whatever its status."""
        item = self.get_or_raise(item_id)
        self.db.delete(item)
        self._commit()
        logger.info(f"Deleted item {item_id}")

    def set_status(
        self,
        item_id: int,
        new_status: ItemStatus,
        consumed_at: datetime | None = None,
    ) -> None:
        """Move an active item to a terminal status."""
        item = self.get_or_raise(item_id)
        new_status = ItemStatus(new_status)

        if item.status.is_terminal or new_status == ItemStatus.ACTIVE:
            raise InvalidTransitionError(item_id, item.status.value, new_status.value)
        if (new_status == ItemStatus.CONSUMED) != (consumed_at is not None):
            raise ValueError("consumed_at must be set exactly when status is consumed")

        item.status = new_status
        item.consumed_at = _to_utc(consumed_at)
        self._commit()

    def expire_overdue(self, today: date) -> int:
        """Expire every active item dated strictly before ``today`` in one UPDATE.

        Returns the number of rows changed.
        """
        count = (
            self._active()
            .filter(InventoryItem.expiry_date < today)
            .update({InventoryItem.status: ItemStatus.EXPIRED}, synchronize_session="fetch")
        )
        self._commit()
        return count

    # --- Reads ---

    def get(self, item_id: int) -> InventoryItem | None:
        return self.db.query(InventoryItem).filter(InventoryItem.id == item_id).first()

    def get_or_raise(self, item_id: int) -> InventoryItem:
        item = self.get(item_id)
        if item is None:
            raise NotFoundError(item_id)
        return item

    def _active(self):
        return self.db.query(InventoryItem).filter(InventoryItem.status == ItemStatus.ACTIVE)

    def list_active(self, sort_by_expiry_ascending: bool = True) -> list[InventoryItem]:
        query = self._active()
        if sort_by_expiry_ascending:
            query = query.order_by(InventoryItem.expiry_date.asc(), InventoryItem.id)
        else:
            query = query.order_by(InventoryItem.id)
        return query.all()

    def list_by_category(self, category: Category) -> list[InventoryItem]:
        return (
            self._active()
            .filter(InventoryItem.category == Category(category))
            .order_by(InventoryItem.expiry_date.asc(), InventoryItem.id)
            .all()
        )

    def list_expiring_by(self, threshold_date: date) -> list[InventoryItem]:
        """Active items expiring on or before ``threshold_date``, soonest first."""
        return (
            self._active()
            .filter(InventoryItem.expiry_date <= threshold_date)
            .order_by(InventoryItem.expiry_date.asc(), InventoryItem.id)
            .all()
        )

    def count_by_status(self) -> StatusCounts:
        rows = (
            self.db.query(InventoryItem.status, func.count(InventoryItem.id))
            .group_by(InventoryItem.status)
            .all()
        )
        counts = StatusCounts()
        for status, count in rows:
            setattr(counts, ItemStatus(status).value, count)
        return counts

    def count_expiring_by(self, threshold_date: date) -> int:
        return self._active().filter(InventoryItem.expiry_date <= threshold_date).count()
