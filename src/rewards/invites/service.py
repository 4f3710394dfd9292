"""Invite link creation, listing and validation."""

import secrets
import string
from datetime import datetime, timedelta, timezone

from rewards.errors import InputValidationError
from rewards.invites.models import InviteLink
from rewards.logging_config import get_logger
from rewards.settings import settings
from rewards.storage.client import INVITE_LINKS, BackendClient, parse_row, parse_rows

logger = get_logger(__name__)

INVITE_CODE_ALPHABET = string.digits + string.ascii_uppercase
INVITE_CODE_LENGTH = 6

# Joined profiles of users who signed up through the link
INVITE_LINKS_WITH_INVITEES = "*, invitees:profiles(id, full_name, created_at)"


def generate_invite_code() -> str:
    """Generate a random invite code.

    Format: uppercase base-36, e.g. 7KQ2ZD. Uniqueness is enforced by the
    backend, not here.
    """
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))


class InviteService:
    """Service for managing invite links."""

    def __init__(
        self,
        backend: BackendClient,
        ttl_days: int | None = None,
    ):
        """Initialize invite service.

        Args:
            backend: Backend handle
            ttl_days: Days until a new link expires (defaults to settings)
        """
        self.backend = backend
        self.ttl_days = ttl_days or settings.invite_ttl_days
        self.logger = get_logger(__name__)

    async def generate_invite_link(self, user_id: str) -> InviteLink:
        """Create a new invite link for a user.

        Args:
            user_id: Creator's user ID

        Returns:
            The stored invite link

        Raises:
            BackendError: If the insert fails (including a code collision)
        """
        code = generate_invite_code()
        expires_at = datetime.now(timezone.utc) + timedelta(days=self.ttl_days)

        rows = await self.backend.execute(
            self.backend.table(INVITE_LINKS).insert(
                [
                    {
                        "creator_id": user_id,
                        "code": code,
                        "expires_at": expires_at.isoformat(),
                    }
                ]
            ),
            operation=f"{INVITE_LINKS}.insert",
        )

        self.logger.info("invite_link_created", user_id=user_id, code=code)

        if rows:
            return parse_row(InviteLink, rows[0], operation=f"{INVITE_LINKS}.insert")
        return InviteLink(creator_id=user_id, code=code, expires_at=expires_at)

    async def get_invite_links(self, user_id: str) -> list[InviteLink]:
        """List a user's invite links with the profiles that joined, newest first."""
        rows = await self.backend.execute(
            self.backend.table(INVITE_LINKS)
            .select(INVITE_LINKS_WITH_INVITEES)
            .eq("creator_id", user_id)
            .order("created_at", desc=True),
            operation=f"{INVITE_LINKS}.select",
        )
        return parse_rows(InviteLink, rows, operation=f"{INVITE_LINKS}.select")

    async def validate_invite_code(self, code: str) -> InviteLink:
        """Look up an unexpired invite link by code.

        Args:
            code: Invite code as entered by the user

        Returns:
            The matching invite link

        Raises:
            InputValidationError: If the code is empty
            BackendError: If no unexpired link has this code (code PGRST116)
        """
        code = (code or "").strip().upper()
        if not code:
            raise InputValidationError.single("code", "required", "Invite code is required")

        now = datetime.now(timezone.utc).isoformat()
        row = await self.backend.execute(
            self.backend.table(INVITE_LINKS)
            .select("*")
            .eq("code", code)
            .gte("expires_at", now)
            .single(),
            operation=f"{INVITE_LINKS}.select",
        )
        return parse_row(InviteLink, row, operation=f"{INVITE_LINKS}.select")
