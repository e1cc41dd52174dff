from __future__ import annotations


class RepositoryError(Exception):
    """Base error for document lookups that the HTTP layer maps to a status."""

    status_code = 500

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail


class NotFoundError(RepositoryError):
    status_code = 404


class InvalidIdError(RepositoryError):
    status_code = 400

    def __init__(self, value: object) -> None:
        super().__init__(f"Invalid id: {value!r}")
        self.value = value


class InvalidFieldError(RepositoryError):
    status_code = 400

    def __init__(self, field: str) -> None:
        super().__init__(f"Invalid field: {field!r}")
        self.field = field


__all__ = ["RepositoryError", "NotFoundError", "InvalidIdError", "InvalidFieldError"]
