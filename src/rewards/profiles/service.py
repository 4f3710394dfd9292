"""Profile reads and updates."""

from collections.abc import Mapping
from typing import Any

from rewards.errors import InputValidationError
from rewards.logging_config import get_logger
from rewards.storage.client import PROFILES, BackendClient

logger = get_logger(__name__)


class ProfileService:
    """Service for reading and updating user profiles."""

    def __init__(self, backend: BackendClient):
        self.backend = backend
        self.logger = get_logger(__name__)

    async def get_profile(self, user_id: str) -> dict[str, Any]:
        """Fetch a profile by id.

        Raises:
            BackendError: If the profile does not exist or the query fails
        """
        return await self.backend.execute(
            self.backend.table(PROFILES).select("*").eq("id", user_id).single(),
            operation=f"{PROFILES}.select",
        )

    async def update_profile(self, user_id: str, updates: Mapping[str, Any]) -> None:
        """Update profile columns.

        Args:
            user_id: Profile ID
            updates: Column values to set; must not include ``id``

        Raises:
            InputValidationError: If updates is empty or touches the id
            BackendError: If the update fails
        """
        if not isinstance(updates, Mapping) or not updates:
            raise InputValidationError.single("updates", "non_empty_mapping", "Profile updates must be a non-empty mapping")
        if any(not isinstance(key, str) or not key for key in updates):
            raise InputValidationError.single("updates", "string_keys", "Profile columns must be non-empty strings")
        if "id" in updates:
            raise InputValidationError.single("updates.id", "immutable", "Profile id cannot be changed")

        await self.backend.execute(
            self.backend.table(PROFILES).update(dict(updates)).eq("id", user_id),
            operation=f"{PROFILES}.update",
        )

        self.logger.info("profile_updated", user_id=user_id, fields=sorted(updates))
