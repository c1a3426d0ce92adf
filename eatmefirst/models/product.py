"""Inventory item model.

Column names follow the persisted record shape shared with the mobile
client (``expiryDate``, ``createdAt``, ``consumedAt``); Python attributes
use snake_case.
"""

from sqlalchemy import Column, Date, DateTime, Enum, Integer, String, Text, func
from sqlalchemy.orm import relationship

from eatmefirst.database import Base
from eatmefirst.models.enums import Category, ItemStatus


def _enum_values(enum_cls):
    return [e.value for e in enum_cls]


class InventoryItem(Base):
    """A perishable item the user is tracking."""

    __tablename__ = "products"
    __table_args__ = {"sqlite_autoincrement": True}  # ids are never reused

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    image = Column(Text, nullable=True)
    expiry_date = Column("expiryDate", Date, nullable=False, index=True)
    category = Column(
        Enum(
            Category,
            name="category",
            native_enum=False,
            create_constraint=True,
            length=20,
            values_callable=_enum_values,
        ),
        nullable=False,
    )
    quantity = Column(String(100), nullable=True, default="1")  # "1L", "3 pcs", ...
    notes = Column(Text, nullable=True)
    created_at = Column("createdAt", DateTime(timezone=True), server_default=func.now())
    consumed_at = Column("consumedAt", DateTime(timezone=True), nullable=True)
    status = Column(
        Enum(
            ItemStatus,
            name="itemstatus",
            native_enum=False,
            create_constraint=True,
            length=20,
            values_callable=_enum_values,
        ),
        nullable=False,
        default=ItemStatus.ACTIVE,
        server_default=ItemStatus.ACTIVE.value,
        index=True,
    )

    # Relationships
    nutrition = relationship(
        "ProductNutrition",
        back_populates="product",
        uselist=False,
        cascade="all, delete-orphan",
        lazy="joined",
    )

    def __repr__(self) -> str:
        return f"<InventoryItem id={self.id} name={self.name!r} status={self.status}>"
