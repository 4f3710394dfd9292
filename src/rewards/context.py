"""Caller-side context attached to audit and analytics records."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ClientContext:
    """Identifies the client an event originated from.

    ip_address is optional: when the caller already knows it (e.g. from a
    forwarded-for header) the public IP lookup is skipped.
    """

    user_agent: str
    page_url: str | None = None
    ip_address: str | None = None
