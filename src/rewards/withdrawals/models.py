"""Withdrawal request models."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict


class WithdrawalStatus(str, Enum):
    """Withdrawal states written by this layer. Later states are set by the backend."""
    PENDING = "pending"


class WithdrawalRequest(BaseModel):
    id: str | int | None = None
    user_id: str
    amount: Decimal
    payment_method: str
    status: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True, extra="allow")
