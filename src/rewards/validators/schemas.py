"""Input schemas for registration and payment-method data.

These are the acceptance contract for anything a user submits. Both models
accept snake_case or camelCase keys (``full_name`` / ``fullName``) so that
payloads coming straight from the web client validate unchanged.
"""

import re
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    JsonValue,
    StrictInt,
    TypeAdapter,
    ValidationError,
    field_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from rewards.errors import InputValidationError

PASSWORD_MIN_LENGTH = 8
FULL_NAME_MIN_LENGTH = 2
MIN_EXPIRY_YEAR = 2024

_JSON_OBJECT = TypeAdapter(dict[str, JsonValue])

_PASSWORD_RULES = (
    ("uppercase", re.compile(r"[A-Z]"), "one uppercase letter"),
    ("lowercase", re.compile(r"[a-z]"), "one lowercase letter"),
    ("digit", re.compile(r"[0-9]"), "one digit"),
)


class UserRegistration(BaseModel):
    """User registration request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    email: EmailStr
    password: str = Field(..., min_length=PASSWORD_MIN_LENGTH)
    full_name: str = Field(..., min_length=FULL_NAME_MIN_LENGTH)

    @field_validator("password")
    @classmethod
    def password_complexity(cls, value: str) -> str:
        missing = [label for _, pattern, label in _PASSWORD_RULES if not pattern.search(value)]
        if missing:
            raise PydanticCustomError(
                "password_complexity",
                "Password must contain at least {missing}",
                {"missing": ", ".join(missing)},
            )
        return value


class PaymentMethod(BaseModel):
    """Payment method submitted for withdrawals."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    type: Literal["card", "bank"]
    last4: str = Field(..., min_length=4, max_length=4)
    expiry_month: StrictInt | None = Field(default=None, ge=1, le=12)
    expiry_year: StrictInt | None = Field(default=None, ge=MIN_EXPIRY_YEAR)
    bank_name: str | None = None


def _field_names(model: type[BaseModel]) -> dict[str, str]:
    return {field.alias or name: name for name, field in model.model_fields.items()}


def validate_user(data: Mapping[str, Any]) -> UserRegistration:
    """Validate registration input.

    Args:
        data: Candidate record (email, password, full name)

    Returns:
        Parsed registration

    Raises:
        InputValidationError: With one issue per violated field constraint
    """
    try:
        return UserRegistration.model_validate(dict(data))
    except ValidationError as exc:
        raise InputValidationError.from_pydantic(
            exc, "registration", _field_names(UserRegistration)
        ) from exc


def validate_payment_method(data: Mapping[str, Any]) -> PaymentMethod:
    """Validate payment-method input.

    Raises:
        InputValidationError: If type, last4 or an expiry field is out of bounds
    """
    try:
        return PaymentMethod.model_validate(dict(data))
    except ValidationError as exc:
        raise InputValidationError.from_pydantic(
            exc, "payment method", _field_names(PaymentMethod)
        ) from exc


def validate_json_mapping(field: str, data: Mapping[str, Any]) -> dict[str, Any]:
    """Check that an open-ended payload is a mapping the backend can store as JSON.

    Args:
        field: Name reported in the error (e.g. "details")
        data: Candidate payload

    Returns:
        Plain dict copy of the payload

    Raises:
        InputValidationError: If data is not a mapping or holds non-JSON values
    """
    if not isinstance(data, Mapping):
        raise InputValidationError.single(field, "mapping", f"{field} must be a mapping")
    try:
        return _JSON_OBJECT.validate_python(dict(data))
    except ValidationError as exc:
        where = ".".join(str(part) for part in exc.errors()[0]["loc"][:1])
        raise InputValidationError.single(
            f"{field}.{where}" if where else field,
            "json",
            f"{field} must contain only JSON values (strings, numbers, booleans, null, lists, objects)",
        ) from exc
