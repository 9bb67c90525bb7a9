from dataclasses import dataclass
from fastapi import status


@dataclass(frozen=True)
class ErrorDefinition:
    code: str
    message: str
    status_code: int


class ErrorCatalog:
    SEQUENCE_UNAVAILABLE = ErrorDefinition(
        "SEQUENCE_UNAVAILABLE",
        "Order number could not be allocated, please retry",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    INVALID_CHANNEL = ErrorDefinition(
        "INVALID_CHANNEL",
        "Unknown order channel",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    EMPTY_BILL = ErrorDefinition(
        "EMPTY_BILL",
        "Bill has no line items",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    ORDER_PERSIST_FAILED = ErrorDefinition(
        "ORDER_PERSIST_FAILED",
        "Could not complete sale, please retry",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    INDEX_OUT_OF_RANGE = ErrorDefinition(
        "INDEX_OUT_OF_RANGE",
        "Line item does not exist",
        status.HTTP_404_NOT_FOUND,
    )
    INVALID_LINE_ITEM = ErrorDefinition(
        "INVALID_LINE_ITEM",
        "Invalid line item",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    BILL_NOT_FOUND = ErrorDefinition("BILL_NOT_FOUND", "Bill not found", status.HTTP_404_NOT_FOUND)
    ORDER_NOT_FOUND = ErrorDefinition("ORDER_NOT_FOUND", "Order not found", status.HTTP_404_NOT_FOUND)
    CATEGORY_NOT_FOUND = ErrorDefinition("CATEGORY_NOT_FOUND", "Category not found", status.HTTP_404_NOT_FOUND)
    CATEGORY_EXISTS = ErrorDefinition("CATEGORY_EXISTS", "Category key already exists", status.HTTP_409_CONFLICT)
    DB_UNAVAILABLE = ErrorDefinition(
        "DB_UNAVAILABLE",
        "Database unavailable",
        status.HTTP_503_SERVICE_UNAVAILABLE,
    )
    LOCK_TIMEOUT = ErrorDefinition(
        "LOCK_TIMEOUT",
        "Lock wait timeout",
        status.HTTP_409_CONFLICT,
    )
    VALIDATION_ERROR = ErrorDefinition(
        "VALIDATION_ERROR",
        "Validation error",
        status.HTTP_422_UNPROCESSABLE_ENTITY,
    )
    INTERNAL_ERROR = ErrorDefinition(
        "INTERNAL_ERROR",
        "Internal server error",
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


class AppError(Exception):
    def __init__(self, error: ErrorDefinition, details: object | None = None):
        self.error = error
        self.details = details
        super().__init__(error.message)


class SequenceUnavailable(AppError):
    """The counter could not hand out a number. Nothing was committed."""

    def __init__(self, details: object | None = None):
        super().__init__(ErrorCatalog.SEQUENCE_UNAVAILABLE, details)


class InvalidChannel(AppError):
    """Programming error: the channel tag is not wired to a prefix."""

    def __init__(self, channel: str):
        self.channel = channel
        super().__init__(ErrorCatalog.INVALID_CHANNEL, {"channel": channel})


class EmptyBillError(AppError):
    def __init__(self, details: object | None = None):
        super().__init__(ErrorCatalog.EMPTY_BILL, details)


class OrderPersistFailed(AppError):
    """The sequence was consumed but the order row was not saved.

    The bill is left untouched so the operator can retry; the burnt number
    stays a gap.
    """

    def __init__(self, details: object | None = None):
        super().__init__(ErrorCatalog.ORDER_PERSIST_FAILED, details)


class IndexOutOfRange(AppError):
    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(ErrorCatalog.INDEX_OUT_OF_RANGE, {"index": index, "line_count": size})


class InvalidLineItem(AppError):
    def __init__(self, message: str, **fields):
        super().__init__(ErrorCatalog.INVALID_LINE_ITEM, {"message": message, **fields})
