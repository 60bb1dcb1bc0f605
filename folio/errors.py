"""Application error taxonomy.

Repositories and validators raise these; the exception handlers in
``folio.main`` are the only place they become HTTP responses.
"""
from http import HTTPStatus


class FolioError(Exception):
    """Base class for all application errors."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message}


class ValidationError(FolioError):
    """Payload failed schema checks. Carries every failing field."""

    status = HTTPStatus.UNPROCESSABLE_ENTITY

    def __init__(self, errors: dict[str, list[str]]):
        super().__init__("Validation failed")
        self.errors = errors

    def to_dict(self) -> dict:
        return {"errors": self.errors}


class NotFoundError(FolioError):
    """Addressed entity does not exist."""

    status = HTTPStatus.NOT_FOUND

    def __init__(self, entity: str, entity_id):
        super().__init__(f"{entity} with id {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class AuthenticationError(FolioError):
    """Missing, malformed or unknown session token, or bad credentials."""

    status = HTTPStatus.UNAUTHORIZED

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class StorageError(FolioError):
    """Unexpected persistence failure. Details never reach the client."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def to_dict(self) -> dict:
        return {"message": "Internal server error"}


class ConflictError(StorageError):
    """Write violated a uniqueness or foreign key constraint."""
