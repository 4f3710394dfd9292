"""Audit trail writes."""

from collections.abc import Mapping
from typing import Any

from rewards.context import ClientContext
from rewards.errors import InputValidationError
from rewards.logging_config import get_logger
from rewards.security.client_ip import ClientIpResolver, resolve_context
from rewards.storage.client import AUDIT_LOGS, BackendClient
from rewards.validators.schemas import validate_json_mapping

logger = get_logger(__name__)

# Columns filled by the logger itself; details may not override them
RESERVED_COLUMNS = frozenset({"user_id", "action", "ip_address", "user_agent"})


def check_details(details: Mapping[str, Any]) -> dict[str, Any]:
    """Validate an open-ended details payload and return a plain dict copy."""
    if not isinstance(details, Mapping):
        raise InputValidationError.single("details", "mapping", "Details must be a mapping")

    for key in details:
        if not isinstance(key, str) or not key:
            raise InputValidationError.single("details", "string_keys", "Detail keys must be non-empty strings")
        if key in RESERVED_COLUMNS:
            raise InputValidationError.single(
                f"details.{key}", "reserved", f"'{key}' is set by the audit logger and cannot be overridden"
            )

    return validate_json_mapping("details", details)


class AuditLogger:
    """Appends entries to the audit log table."""

    def __init__(
        self,
        backend: BackendClient,
        ip_resolver: ClientIpResolver | None = None,
        user_agent: str | None = None,
    ):
        self.backend = backend
        self.ip_resolver = ip_resolver or ClientIpResolver()
        self.user_agent = user_agent
        self.logger = get_logger(__name__)

    async def log_audit_event(
        self,
        user_id: str,
        action: str,
        details: Mapping[str, Any],
        context: ClientContext | None = None,
    ) -> None:
        """Append one audit entry.

        Detail keys are stored as columns of the entry. The client IP is
        looked up when the context does not carry one; a failed lookup is
        recorded as 0.0.0.0.

        Raises:
            InputValidationError: If details shadow a reserved column
            BackendError: If the insert fails
        """
        row = check_details(details)
        context = await resolve_context(context, self.ip_resolver, self.user_agent)

        await self.backend.execute(
            self.backend.table(AUDIT_LOGS).insert(
                [
                    {
                        "user_id": user_id,
                        "action": action,
                        **row,
                        "ip_address": context.ip_address,
                        "user_agent": context.user_agent,
                    }
                ]
            ),
            operation=f"{AUDIT_LOGS}.insert",
        )

        self.logger.info("audit_event_logged", user_id=user_id, action=action)
