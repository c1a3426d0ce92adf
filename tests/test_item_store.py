"""Tests for the item store."""

from datetime import datetime, timedelta, timezone

import pytest

from eatmefirst.exceptions import (
    InvalidTransitionError,
    NotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from eatmefirst.models import Category, InventoryItem, ItemStatus, ProductNutrition
from eatmefirst.schemas.product import ProductCreate
from eatmefirst.services.item_store import ItemStore


def test_create_item(store, today):
    item_id = store.create(
        {
            "name": "  Greek Yogurt ",
            "expiry_date": (today + timedelta(days=5)).isoformat(),
            "category": "Fridge",
            "quantity": "500g",
            "notes": "Plain",
        }
    )

    item = store.get(item_id)
    assert item.name == "Greek Yogurt"
    assert item.expiry_date == today + timedelta(days=5)
    assert item.category == Category.FRIDGE
    assert item.quantity == "500g"
    assert item.notes == "Plain"
    assert item.status == ItemStatus.ACTIVE
    assert item.consumed_at is None
    assert item.created_at is not None


def test_create_accepts_schema(store, today):
    item_id = store.create(
        ProductCreate(name="Rice", expiry_date=today, category=Category.PANTRY)
    )
    assert store.get(item_id).category == Category.PANTRY


def test_quantity_defaults_to_one(store, today):
    item_id = store.create({"name": "Eggs", "expiry_date": today, "category": "Fridge"})
    assert store.get(item_id).quantity == "1"

    item_id = store.create(
        {"name": "Ham", "expiry_date": today, "category": "Fridge", "quantity": None}
    )
    assert store.get(item_id).quantity == "1"


@pytest.mark.parametrize(
    ("fields", "bad_field"),
    [
        ({"name": ""}, "name"),
        ({"name": "   "}, "name"),
        ({"category": "Cellar"}, "category"),
        ({"expiry_date": "next tuesday"}, "expiry_date"),
        ({"expiry_date": "2026-02-30"}, "expiry_date"),
        ({"expiry_date": None}, "expiry_date"),
    ],
)
def test_create_rejects_malformed_input(store, db, today, fields, bad_field):
    """Invalid input raises ValidationError and inserts nothing."""
    data = {"name": "Milk", "expiry_date": today.isoformat(), "category": "Fridge", **fields}

    with pytest.raises(ValidationError) as exc_info:
        store.create(data)

    assert exc_info.value.field == bad_field
    assert exc_info.value.code == "VALIDATION_ERROR"
    assert db.query(InventoryItem).count() == 0


def test_ids_are_not_reused(store, make_item):
    first = make_item("First")
    store.delete(first)
    second = make_item("Second")
    assert second > first


def test_get_missing_item(store):
    assert store.get(12345) is None
    with pytest.raises(NotFoundError):
        store.get_or_raise(12345)


def test_list_active_sorted_by_expiry(store, make_item):
    late = make_item("Pasta", days=30)
    soon = make_item("Milk", days=1)
    middle = make_item("Cheese", days=10)
    store.set_status(middle, ItemStatus.EXPIRED)

    assert [i.id for i in store.list_active()] == [soon, late]


def test_list_by_category(store, make_item):
    peas = make_item("Peas", days=100, category="Freezer")
    make_item("Milk", days=2, category="Fridge")
    ice = make_item("Ice Cream", days=50, category="Freezer")

    assert [i.id for i in store.list_by_category(Category.FREEZER)] == [ice, peas]


def test_list_expiring_by(store, make_item, today):
    """An item two days out is inside a 3-day window but outside a 1-day one."""
    item_id = make_item(days=2)

    assert [i.id for i in store.list_expiring_by(today + timedelta(days=3))] == [item_id]
    assert store.list_expiring_by(today + timedelta(days=1)) == []


def test_list_expiring_by_is_inclusive_and_ordered(store, make_item, today):
    third = make_item("C", days=3)
    first = make_item("A", days=0)
    second = make_item("B", days=1)
    make_item("D", days=4)

    result = store.list_expiring_by(today + timedelta(days=3))
    assert [i.id for i in result] == [first, second, third]


def test_expire_overdue(store, make_item, clock, today):
    overdue = make_item("Old", days=-1)
    eaten = make_item("Eaten", days=-2)
    store.set_status(eaten, ItemStatus.CONSUMED, consumed_at=clock.now)
    fresh = make_item("Today", days=0)

    assert store.expire_overdue(today) == 1

    assert store.get(overdue).status == ItemStatus.EXPIRED
    assert store.get(overdue).consumed_at is None
    assert store.get(eaten).status == ItemStatus.CONSUMED
    assert store.get(fresh).status == ItemStatus.ACTIVE
    assert store.expire_overdue(today) == 0


def test_timestamps_stored_as_utc(store):
    tz = timezone(timedelta(hours=2))
    item_id = store.create(
        {"name": "Milk", "expiry_date": "2026-03-20", "category": "Fridge"},
        created_at=datetime(2026, 3, 10, 11, 30, tzinfo=tz),
    )
    store.set_status(
        item_id, ItemStatus.CONSUMED, consumed_at=datetime(2026, 3, 11, 8, 0, tzinfo=tz)
    )

    item = store.get(item_id)
    assert item.created_at.replace(tzinfo=None) == datetime(2026, 3, 10, 9, 30)
    assert item.consumed_at.replace(tzinfo=None) == datetime(2026, 3, 11, 6, 0)


def test_update_only_supplied_fields(store, make_item, today):
    item_id = make_item("Milk", days=2, quantity="1L", notes="Oat")

    store.update(item_id, {"quantity": "2L", "expiry_date": (today + timedelta(days=4)).isoformat()})

    item = store.get(item_id)
    assert item.name == "Milk"
    assert item.notes == "Oat"
    assert item.quantity == "2L"
    assert item.expiry_date == today + timedelta(days=4)


def test_update_does_not_touch_status(store, make_item):
    item_id = make_item()
    store.set_status(item_id, ItemStatus.EXPIRED)

    store.update(item_id, {"name": "Renamed", "status": "active", "consumed_at": "2026-01-01"})

    item = store.get(item_id)
    assert item.name == "Renamed"
    assert item.status == ItemStatus.EXPIRED
    assert item.consumed_at is None


def test_update_clears_optional_fields(store, make_item):
    item_id = make_item(notes="Some note", image="file:///photo.jpg")

    store.update(item_id, {"notes": None, "image": None})

    item = store.get(item_id)
    assert item.notes is None
    assert item.image is None


@pytest.mark.parametrize(
    "fields",
    [{"name": ""}, {"name": None}, {"category": "Garage"}, {"expiry_date": "soon"}],
)
def test_update_rejects_malformed_input(store, make_item, fields):
    item_id = make_item("Milk")

    with pytest.raises(ValidationError):
        store.update(item_id, fields)

    assert store.get(item_id).name == "Milk"


def test_update_missing_item(store):
    with pytest.raises(NotFoundError):
        store.update(999, {"name": "Ghost"})


def test_delete_removes_any_status(store, make_item):
    item_id = make_item()
    store.set_status(item_id, ItemStatus.EXPIRED)

    store.delete(item_id)

    assert store.get(item_id) is None


def test_delete_missing_item(store):
    with pytest.raises(NotFoundError):
        store.delete(999)


class TestSetStatus:
    """Tests for the monotonic status guard."""

    def test_consume_requires_timestamp(self, store, make_item):
        item_id = make_item()
        with pytest.raises(ValueError):
            store.set_status(item_id, ItemStatus.CONSUMED)
        assert store.get(item_id).status == ItemStatus.ACTIVE

    def test_expire_rejects_timestamp(self, store, make_item, clock):
        item_id = make_item()
        with pytest.raises(ValueError):
            store.set_status(item_id, ItemStatus.EXPIRED, consumed_at=clock.now)

    def test_cannot_reactivate(self, store, make_item):
        item_id = make_item()
        with pytest.raises(InvalidTransitionError):
            store.set_status(item_id, ItemStatus.ACTIVE)

    def test_terminal_status_is_final(self, store, make_item, clock):
        item_id = make_item()
        store.set_status(item_id, ItemStatus.CONSUMED, consumed_at=clock.now)

        with pytest.raises(InvalidTransitionError) as exc_info:
            store.set_status(item_id, ItemStatus.EXPIRED)

        assert exc_info.value.current_status == "consumed"
        assert exc_info.value.target_status == "expired"
        assert store.get(item_id).status == ItemStatus.CONSUMED


def test_count_by_status(store, make_item, clock, today):
    make_item("A")
    make_item("B")
    consumed = make_item("C")
    expired = make_item("D")
    store.set_status(consumed, ItemStatus.CONSUMED, consumed_at=clock.now)
    store.set_status(expired, ItemStatus.EXPIRED)

    counts = store.count_by_status()
    assert (counts.active, counts.consumed, counts.expired) == (2, 1, 1)
    assert counts.total == 4


def test_count_expiring_by(store, make_item, today):
    make_item("A", days=1)
    make_item("B", days=3)
    make_item("C", days=4)

    assert store.count_expiring_by(today + timedelta(days=3)) == 2


class TestNutrition:
    """Tests for the nutrition sub-record."""

    def test_create_with_nutrition(self, store, make_item):
        item_id = make_item(nutrition={"calories": 64, "protein": 3.3, "carbs": 4.8, "fat": 3.6})

        nutrition = store.get(item_id).nutrition
        assert nutrition.calories == 64
        assert nutrition.fat == 3.6

    def test_update_replaces_nutrition(self, store, make_item):
        item_id = make_item(nutrition={"calories": 100, "protein": 5})

        store.update(item_id, {"nutrition": {"calories": 120}})

        nutrition = store.get(item_id).nutrition
        assert nutrition.calories == 120
        assert nutrition.protein is None

    def test_update_adds_and_removes_nutrition(self, store, make_item, db):
        item_id = make_item()

        store.update(item_id, {"nutrition": {"carbs": 20}})
        assert store.get(item_id).nutrition.carbs == 20

        store.update(item_id, {"nutrition": None})
        assert store.get(item_id).nutrition is None
        assert db.query(ProductNutrition).count() == 0

    def test_delete_removes_nutrition(self, store, make_item, db):
        item_id = make_item(nutrition={"calories": 10})

        store.delete(item_id)

        assert db.query(ProductNutrition).count() == 0

    def test_rejects_negative_values(self, store, make_item):
        with pytest.raises(ValidationError):
            make_item(nutrition={"calories": -5})


class TestUninitializedStore:
    """Every operation fails until initialize() has run."""

    def test_operations_raise(self, db, today):
        store = ItemStore(lambda: db)

        assert not store.is_initialized
        with pytest.raises(StoreUnavailableError):
            store.create({"name": "Milk", "expiry_date": today, "category": "Fridge"})
        with pytest.raises(StoreUnavailableError):
            store.list_active()
        with pytest.raises(StoreUnavailableError):
            store.count_by_status()

    def test_close_makes_store_unavailable(self, db):
        store = ItemStore(lambda: db)
        store.initialize()
        store.close()

        with pytest.raises(StoreUnavailableError):
            store.get(1)
