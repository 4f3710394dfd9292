from rewards.points.models import UserPoints
from rewards.points.service import PointsService

__all__ = ["PointsService", "UserPoints"]
