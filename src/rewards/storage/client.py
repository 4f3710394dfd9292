"""Backend handle for the Supabase project.

One ``BackendClient`` wraps one Supabase ``AsyncClient`` for the lifetime of
the process. Services build queries through it and hand them back to
``execute`` so that every failure is normalized into ``BackendError`` in one
place.
"""

from typing import Any, TypeVar

import httpx
from postgrest.exceptions import APIError
from pydantic import BaseModel, ValidationError
from supabase import AsyncClient, acreate_client

from rewards.errors import BackendError, ConfigurationError
from rewards.logging_config import get_logger
from rewards.settings import Settings

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

# Tables
PROFILES = "profiles"
USER_POINTS = "user_points"
WITHDRAWAL_REQUESTS = "withdrawal_requests"
INVITE_LINKS = "invite_links"
AUDIT_LOGS = "audit_logs"

# Remote procedures
RPC_CHECK_RATE_LIMIT = "check_rate_limit"
RPC_RECORD_ANALYTICS_EVENT = "record_analytics_event"


class BackendClient:
    """Single long-lived handle to the backend service."""

    def __init__(self, client: AsyncClient):
        """Wrap an already constructed Supabase client.

        Args:
            client: Supabase async client (or a test double with the same surface)
        """
        self.client = client

    @classmethod
    async def from_settings(cls, settings: Settings) -> "BackendClient":
        """Build the handle from configuration.

        Raises:
            ConfigurationError: If the project URL or anon key is missing
        """
        missing = [
            name
            for name, value in (
                ("SUPABASE_URL", settings.supabase_url),
                ("SUPABASE_ANON_KEY", settings.supabase_anon_key),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing Supabase environment variables: {', '.join(missing)}")

        try:
            client = await acreate_client(settings.supabase_url, settings.supabase_anon_key)
        except Exception as exc:
            # supabase raises SupabaseException for malformed URL or key
            raise ConfigurationError(f"Invalid Supabase configuration: {exc}") from exc

        logger.info("backend_client_initialized", url=settings.supabase_url)
        return cls(client)

    def table(self, name: str):
        """Start a query against a table."""
        return self.client.table(name)

    def rpc(self, function: str, params: dict[str, Any]):
        """Start a remote procedure call."""
        return self.client.rpc(function, params)

    async def execute(self, query, operation: str) -> Any:
        """Run a prepared query and return its data.

        Args:
            query: Query or RPC builder
            operation: Short label used in logs and errors (e.g. "profiles.select")

        Returns:
            Response data as decoded by the client

        Raises:
            BackendError: On any error reported by the service or transport
        """
        try:
            response = await query.execute()
        except APIError as exc:
            error = BackendError(
                exc.message or "Backend request failed",
                code=exc.code,
                details=exc.details,
                hint=exc.hint,
                operation=operation,
            )
            # No-row results are routine for lookups; keep them out of warnings
            log = logger.debug if error.is_no_rows else logger.warning
            log("backend_call_failed", operation=operation, code=exc.code, error=error.message)
            raise error from exc
        except httpx.TimeoutException as exc:
            logger.warning("backend_call_timeout", operation=operation)
            raise BackendError("Request timeout", code="timeout", operation=operation) from exc
        except httpx.HTTPError as exc:
            logger.warning("backend_call_transport_error", operation=operation, error=str(exc))
            raise BackendError(
                f"Request failed: {exc}", code="request_error", operation=operation
            ) from exc

        return response.data if response is not None else None


def parse_row(model: type[ModelT], row: Any, operation: str) -> ModelT:
    """Parse one backend row into a model.

    Raises:
        BackendError: With code ``invalid_response`` if the row has an unexpected shape
    """
    try:
        return model.model_validate(row)
    except ValidationError as exc:
        logger.warning("backend_row_invalid", operation=operation, model=model.__name__, errors=exc.error_count())
        raise BackendError(
            f"Unexpected {model.__name__} row shape: {exc.error_count()} invalid field(s)",
            code="invalid_response",
            details=exc.errors(include_url=False),
            operation=operation,
        ) from exc


def parse_rows(model: type[ModelT], rows: Any, operation: str) -> list[ModelT]:
    """Parse a list of backend rows; ``None`` is treated as empty."""
    if rows is None:
        return []
    if not isinstance(rows, list):
        raise BackendError(
            f"Expected a list of {model.__name__} rows", code="invalid_response", operation=operation
        )
    return [parse_row(model, row, operation) for row in rows]
