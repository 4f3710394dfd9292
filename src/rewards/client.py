"""Facade bundling every service around one backend handle."""

from rewards.invites.service import InviteService
from rewards.logging_config import get_logger
from rewards.points.service import PointsService
from rewards.profiles.service import ProfileService
from rewards.security.analytics import AnalyticsTracker
from rewards.security.audit import AuditLogger
from rewards.security.client_ip import ClientIpResolver
from rewards.security.rate_limit import RateLimiter
from rewards.settings import Settings, settings as default_settings
from rewards.storage.client import BackendClient
from rewards.withdrawals.service import WithdrawalService

logger = get_logger(__name__)


class RewardsClient:
    """Entry point for callers.

    Build it once with ``await RewardsClient.from_settings()`` and share it;
    tests pass a ``BackendClient`` around a fake Supabase client instead.
    """

    def __init__(
        self,
        backend: BackendClient,
        settings: Settings | None = None,
        ip_resolver: ClientIpResolver | None = None,
    ):
        settings = settings or default_settings
        self.backend = backend
        self.ip_resolver = ip_resolver or ClientIpResolver(
            lookup_url=settings.ip_lookup_url,
            timeout=settings.ip_lookup_timeout,
        )

        self.profiles = ProfileService(backend)
        self.points = PointsService(backend)
        self.withdrawals = WithdrawalService(backend)
        self.invites = InviteService(
            backend,
            ttl_days=settings.invite_ttl_days,
        )
        self.rate_limiter = RateLimiter(backend)
        self.audit = AuditLogger(backend, self.ip_resolver, user_agent=settings.user_agent)
        self.analytics = AnalyticsTracker(backend, self.ip_resolver, user_agent=settings.user_agent)

    @classmethod
    async def from_settings(cls, settings: Settings | None = None) -> "RewardsClient":
        """Create the backend handle from configuration and wrap it.

        Raises:
            ConfigurationError: If SUPABASE_URL or SUPABASE_ANON_KEY is missing
        """
        settings = settings or default_settings
        backend = await BackendClient.from_settings(settings)
        return cls(backend, settings=settings)
