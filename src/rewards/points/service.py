"""Points balance reads and writes."""

from rewards.errors import BackendError
from rewards.logging_config import get_logger
from rewards.points.models import UserPoints, utcnow
from rewards.storage.client import USER_POINTS, BackendClient, parse_row

logger = get_logger(__name__)


class PointsService:
    """Service for user points balances."""

    def __init__(self, backend: BackendClient):
        self.backend = backend
        self.logger = get_logger(__name__)

    async def get_user_points(self, user_id: str) -> UserPoints:
        """Get a user's points balance.

        Users without a ``user_points`` row get a zero balance stamped with
        the current time instead of an error.

        Args:
            user_id: User ID

        Returns:
            Stored balance, or the zero default

        Raises:
            BackendError: For any failure other than "no rows"
        """
        try:
            row = await self.backend.execute(
                self.backend.table(USER_POINTS)
                .select("points, last_points_update")
                .eq("user_id", user_id)
                .single(),
                operation=f"{USER_POINTS}.select",
            )
        except BackendError as e:
            if not e.is_no_rows:
                raise
            row = None

        if not row:
            return UserPoints(points=0, last_points_update=utcnow())

        return parse_row(UserPoints, row, operation=f"{USER_POINTS}.select")

    async def update_user_points(self, user_id: str, points: int) -> None:
        """Set a user's points balance, creating the row if needed.

        Raises:
            BackendError: If the upsert fails
        """
        await self.backend.execute(
            self.backend.table(USER_POINTS).upsert(
                {
                    "user_id": user_id,
                    "points": points,
                    "last_points_update": utcnow().isoformat(),
                },
                on_conflict="user_id",
            ),
            operation=f"{USER_POINTS}.upsert",
        )

        self.logger.info("user_points_updated", user_id=user_id, points=points)
