"""Rate limiting, audit logging and analytics.

All three delegate the actual work to the backend:
- Rate limiting: ``check_rate_limit`` stored procedure
- Audit logging: ``audit_logs`` table
- Analytics: ``record_analytics_event`` stored procedure
"""

from rewards.security.analytics import AnalyticsTracker
from rewards.security.audit import AuditLogger
from rewards.security.client_ip import UNKNOWN_IP, ClientIpResolver, IpLookupResult
from rewards.security.rate_limit import RateLimiter

__all__ = [
    "AnalyticsTracker",
    "AuditLogger",
    "ClientIpResolver",
    "IpLookupResult",
    "RateLimiter",
    "UNKNOWN_IP",
]
