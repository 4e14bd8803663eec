from __future__ import annotations


class AppError(Exception):
    """Base for errors the HTTP layer maps onto a client-facing status."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class BadRequestError(AppError):
    status_code = 400


class NotFoundError(AppError):
    status_code = 404
