"""
Error taxonomy for the Perks API.

Every error a caller can recover from derives from ``PerkAPIError`` and
carries the HTTP status it maps to together with a human‑readable
message.  The FastAPI exception handlers in ``main`` and the
``requests`` client in ``perks_client`` both rely on this mapping.

``UniqueConstraintViolation`` is different: it is raised by the
persistence layer and never reaches the HTTP surface directly.  The
service layer turns it into a ``ConflictError``.
"""

from typing import Dict, Type


class PerkAPIError(Exception):
    """Base class for errors that map onto a client‑facing response."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(PerkAPIError):
    """Input is malformed, out of range or missing a required field."""

    status_code = 400
    default_message = "Invalid perk data"


class BadRequestError(PerkAPIError):
    """A required query parameter is missing or empty."""

    status_code = 400
    default_message = "Bad request"


class NotFoundError(PerkAPIError):
    status_code = 404
    default_message = "Perk not found"


class ConflictError(PerkAPIError):
    status_code = 409
    default_message = "Duplicate perk for this merchant"


class UniqueConstraintViolation(Exception):
    """Raised by the repository when a write breaks a UNIQUE index."""


# Used by the API client to rebuild typed errors from status codes.  400
# is ambiguous on the wire; the client reports it as ValidationError.
ERRORS_BY_STATUS: Dict[int, Type[PerkAPIError]] = {
    400: ValidationError,
    404: NotFoundError,
    409: ConflictError,
}
