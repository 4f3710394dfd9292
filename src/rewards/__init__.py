"""Typed async access layer for the referral rewards backend.

Provides:
- Input validation for registrations and payment methods
- Profile, points, withdrawal and invite accessors
- Rate-limit checks, audit logging and analytics tracking
"""

from rewards.client import RewardsClient
from rewards.context import ClientContext
from rewards.errors import BackendError, ConfigurationError, InputValidationError, RewardsError
from rewards.validators import validate_payment_method, validate_user

__version__ = "0.1.0"

__all__ = [
    "BackendError",
    "ClientContext",
    "ConfigurationError",
    "InputValidationError",
    "RewardsClient",
    "RewardsError",
    "validate_payment_method",
    "validate_user",
]
