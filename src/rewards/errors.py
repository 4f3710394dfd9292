"""Exception hierarchy for the rewards access layer."""

from typing import Any

from pydantic import ValidationError

# PostgREST error code returned by .single() when the filter matched nothing
NO_ROWS_CODE = "PGRST116"


class RewardsError(Exception):
    """Base class for all rewards errors."""


class ConfigurationError(RewardsError):
    """Required configuration is missing or unusable."""


class InputValidationError(RewardsError):
    """User-supplied data failed validation before any remote call."""

    def __init__(self, message: str, issues: list[dict[str, Any]] | None = None):
        self.message = message
        self.issues = issues or []
        super().__init__(message)

    @property
    def fields(self) -> list[str]:
        """Names of the offending fields, in report order."""
        seen: list[str] = []
        for issue in self.issues:
            if issue["field"] not in seen:
                seen.append(issue["field"])
        return seen

    @classmethod
    def from_pydantic(
        cls,
        exc: ValidationError,
        model: str,
        field_names: dict[str, str] | None = None,
    ) -> "InputValidationError":
        """Flatten a pydantic ValidationError into field/constraint issues.

        field_names maps input aliases (fullName) back to attribute names.
        """
        field_names = field_names or {}
        issues = [
            {
                "field": ".".join(field_names.get(str(part), str(part)) for part in error["loc"])
                or "__root__",
                "constraint": error["type"],
                "message": error["msg"],
            }
            for error in exc.errors()
        ]
        summary = ", ".join(f"{i['field']} ({i['constraint']})" for i in issues)
        return cls(f"Invalid {model}: {summary}", issues)

    @classmethod
    def single(cls, field: str, constraint: str, message: str) -> "InputValidationError":
        return cls(message, [{"field": field, "constraint": constraint, "message": message}])


class BackendError(RewardsError):
    """Failure reported by the backend service or its transport."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: Any = None,
        hint: str | None = None,
        operation: str | None = None,
    ):
        self.message = message
        self.code = code
        self.details = details
        self.hint = hint
        self.operation = operation
        super().__init__(message)

    @property
    def is_no_rows(self) -> bool:
        """True when a single-row query matched nothing."""
        return self.code == NO_ROWS_CODE

    def __str__(self) -> str:
        prefix = f"[{self.code}] " if self.code else ""
        where = f" during {self.operation}" if self.operation else ""
        return f"{prefix}{self.message}{where}"
