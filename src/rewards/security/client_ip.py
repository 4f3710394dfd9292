"""Best-effort public IP lookup."""

from dataclasses import dataclass, replace

import httpx

from rewards.context import ClientContext
from rewards.logging_config import get_logger
from rewards.settings import settings

logger = get_logger(__name__)

UNKNOWN_IP = "0.0.0.0"


@dataclass(frozen=True)
class IpLookupResult:
    """Outcome of a public IP lookup.

    When the lookup fails ``ip`` is ``UNKNOWN_IP`` and ``resolved`` is False.
    """

    ip: str
    resolved: bool
    error: str | None = None

    @classmethod
    def unknown(cls, error: str) -> "IpLookupResult":
        return cls(ip=UNKNOWN_IP, resolved=False, error=error)


class ClientIpResolver:
    """Resolves the caller's public IP through an external echo service."""

    def __init__(
        self,
        lookup_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize resolver.

        Args:
            lookup_url: Endpoint returning ``{"ip": "..."}``. Defaults to settings.
            timeout: Request timeout in seconds. Defaults to settings.
            transport: Optional httpx transport (used by tests)
        """
        self.lookup_url = lookup_url or settings.ip_lookup_url
        self.timeout = timeout if timeout is not None else settings.ip_lookup_timeout
        self.transport = transport

    async def resolve(self) -> IpLookupResult:
        """Look up the public IP. Never raises."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.lookup_url)
                response.raise_for_status()
                ip = response.json().get("ip")
        except (httpx.HTTPError, httpx.InvalidURL, ValueError, AttributeError) as e:
            logger.warning("client_ip_lookup_failed", url=self.lookup_url, error=str(e))
            return IpLookupResult.unknown(str(e) or type(e).__name__)

        if not isinstance(ip, str) or not ip:
            logger.warning("client_ip_lookup_failed", url=self.lookup_url, error="missing ip field")
            return IpLookupResult.unknown("missing ip field")

        return IpLookupResult(ip=ip, resolved=True)


async def resolve_context(
    context: ClientContext | None,
    resolver: ClientIpResolver,
    default_user_agent: str | None = None,
) -> ClientContext:
    """Fill in the IP address (and default user agent) for an event context."""
    if context is None:
        context = ClientContext(user_agent=default_user_agent or settings.user_agent)
    if context.ip_address:
        return context

    result = await resolver.resolve()
    return replace(context, ip_address=result.ip)
