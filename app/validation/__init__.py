"""Request validation for game record payloads.

Every endpoint runs its payload through these checks before the store is touched,
so malformed requests are rejected the same way regardless of entry point.
"""

from app.validation.validators import (
    check_required_fields,
    check_update_fields,
    validate_create,
    validate_delete,
    validate_identifier,
    validate_update,
)

__all__ = [
    "check_required_fields",
    "check_update_fields",
    "validate_create",
    "validate_delete",
    "validate_identifier",
    "validate_update",
]
