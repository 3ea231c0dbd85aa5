from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse


class NotificationError(Exception):
    """Base class for notification engine errors."""


class PersistenceError(NotificationError):
    """Raised by a storage adapter when a notification cannot be saved or loaded."""


class InvalidNotificationType(NotificationError, ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown notification type: {value!r}")


class InvalidPriority(NotificationError, ValueError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown priority: {value!r}")


class UnknownContextLabel(NotificationError, ValueError):
    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Pattern rule uses unregistered context label: {label!r}")


class NotificationNotFound(NotificationError, LookupError):
    def __init__(self, notification_id: int):
        self.notification_id = notification_id
        super().__init__(f"Notification {notification_id} not found")


def create_error_response(error_message: str, status_code: int = 400) -> dict:
    """Create a standardized error response"""
    return {
        "success": False,
        "data": None,
        "error": error_message
    }


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code)
    )


_STATUS_BY_ERROR = (
    (NotificationNotFound, 404),
    (InvalidNotificationType, 422),
    (InvalidPriority, 422),
    (PersistenceError, 503),
)


async def notification_error_handler(request: Request, exc: NotificationError) -> JSONResponse:
    """Map engine errors onto the standard JSON error envelope."""
    status_code = 500
    for error_cls, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_cls):
            status_code = code
            break
    message = str(exc) if status_code != 500 else "Notification processing failed"
    return JSONResponse(status_code=status_code, content=create_error_response(message, status_code))
