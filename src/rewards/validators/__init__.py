"""Input validation for user-submitted data."""

from rewards.validators.schemas import (
    PaymentMethod,
    UserRegistration,
    validate_json_mapping,
    validate_payment_method,
    validate_user,
)

__all__ = [
    "PaymentMethod",
    "UserRegistration",
    "validate_json_mapping",
    "validate_payment_method",
    "validate_user",
]
