"""Typed exceptions raised by the inventory core.

Every exception carries a class-level ``code`` so the HTTP layer and other
callers can react by type and report a stable, machine-readable identifier
instead of matching on message text.

    InventoryError (base)
    +-- ValidationError          malformed create/update input
    +-- NotFoundError            unknown item id
    +-- InvalidTransitionError   status change on a non-active item
    +-- StoreUnavailableError    store used before initialize()
"""


class InventoryError(Exception):
    """Base exception for all inventory core errors."""

    code: str = "INVENTORY_ERROR"


class ValidationError(InventoryError):
    """Input to create/update was rejected; nothing was written."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        super().__init__(message)


class NotFoundError(InventoryError):
    """The referenced item does not exist."""

    code: str = "NOT_FOUND"

    def __init__(self, item_id: int):
        self.item_id = item_id
        super().__init__(f"Item not found: {item_id}")


class InvalidTransitionError(InventoryError):
    """A status transition was attempted on an item that is not active.

    Usually means the caller acted on a stale read.
    """

    code: str = "INVALID_TRANSITION"

    def __init__(self, item_id: int, current_status: str, target_status: str):
        self.item_id = item_id
        self.current_status = current_status
        self.target_status = target_status
        super().__init__(
            f"Cannot move item {item_id} from '{current_status}' to '{target_status}'"
        )


class StoreUnavailableError(InventoryError):
    """The item store was used before initialization completed."""

    code: str = "STORE_UNAVAILABLE"

    def __init__(self, message: str = "Item store not initialized. Call initialize() first."):
        super().__init__(message)
