"""Rate-limit checks delegated to the backend."""

from rewards.errors import InputValidationError
from rewards.logging_config import get_logger
from rewards.storage.client import RPC_CHECK_RATE_LIMIT, BackendClient

logger = get_logger(__name__)


class RateLimiter:
    """Asks the backend whether an action is currently allowed.

    The window policy and the request counters live in the
    ``check_rate_limit`` stored procedure; this class only forwards the call.
    """

    def __init__(self, backend: BackendClient):
        self.backend = backend
        self.logger = get_logger(__name__)

    async def check_rate_limit(
        self,
        user_id: str,
        action: str,
        max_requests: int,
        window_seconds: int,
    ) -> bool:
        """Check whether ``action`` is permitted for ``user_id``.

        Args:
            user_id: User ID
            action: Action label (e.g. "withdraw")
            max_requests: Allowed requests per window
            window_seconds: Window length in seconds

        Returns:
            The boolean returned by the backend, unchanged

        Raises:
            InputValidationError: If the limits are not positive integers
            BackendError: If the backend reports a failure
        """
        if not action:
            raise InputValidationError.single("action", "required", "Action label is required")
        for field, value in (("max_requests", max_requests), ("window_seconds", window_seconds)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InputValidationError.single(field, "positive_int", f"{field} must be a positive integer")

        allowed = await self.backend.execute(
            self.backend.rpc(
                RPC_CHECK_RATE_LIMIT,
                {
                    "p_user_id": user_id,
                    "p_action": action,
                    "p_max_requests": max_requests,
                    "p_window_seconds": window_seconds,
                },
            ),
            operation=f"rpc.{RPC_CHECK_RATE_LIMIT}",
        )

        if not allowed:
            self.logger.info("rate_limit_exceeded", user_id=user_id, action=action)

        return allowed
