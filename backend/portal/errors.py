from typing import Any


class AppError(Exception):
    code: str = "APP_ERROR"
    message: str = "Application error"
    details: Any | None = None

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        details: Any | None = None,
    ):
        if message is not None:
            self.message = message
        if code is not None:
            self.code = code
        if details is not None:
            self.details = details

        super().__init__(self.message)


class NotFoundError(AppError):
    code = "NOT_FOUND"
    message = "Resource not found"


class SessionStoreError(AppError):
    code = "SESSION_STORE_ERROR"
    message = "Session store operation failed"

