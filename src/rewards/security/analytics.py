"""Analytics event recording."""

from collections.abc import Mapping
from typing import Any

from rewards.context import ClientContext
from rewards.errors import InputValidationError
from rewards.logging_config import get_logger
from rewards.security.client_ip import ClientIpResolver, resolve_context
from rewards.storage.client import RPC_RECORD_ANALYTICS_EVENT, BackendClient
from rewards.validators.schemas import validate_json_mapping

logger = get_logger(__name__)


class AnalyticsTracker:
    """Records analytics events through the ``record_analytics_event`` RPC."""

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

    async def track_event(
        self,
        user_id: str,
        event_type: str,
        event_data: Mapping[str, Any],
        context: ClientContext | None = None,
    ) -> None:
        """Record one analytics event.

        Args:
            user_id: User ID
            event_type: Event name (e.g. "invite_shared")
            event_data: Event payload, stored as JSON
            context: Page URL, user agent and optionally the client IP

        Raises:
            BackendError: If the RPC fails
        """
        if not event_type:
            raise InputValidationError.single("event_type", "required", "Event type is required")
        event_data = validate_json_mapping("event_data", event_data)

        context = await resolve_context(context, self.ip_resolver, self.user_agent)

        await self.backend.execute(
            self.backend.rpc(
                RPC_RECORD_ANALYTICS_EVENT,
                {
                    "p_user_id": user_id,
                    "p_event_type": event_type,
                    "p_event_data": event_data,
                    "p_page_url": context.page_url,
                    "p_user_agent": context.user_agent,
                    "p_ip_address": context.ip_address,
                },
            ),
            operation=f"rpc.{RPC_RECORD_ANALYTICS_EVENT}",
        )

        self.logger.debug("analytics_event_recorded", user_id=user_id, event_type=event_type)
