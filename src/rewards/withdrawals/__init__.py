from rewards.withdrawals.models import WithdrawalRequest, WithdrawalStatus
from rewards.withdrawals.service import WithdrawalService

__all__ = ["WithdrawalRequest", "WithdrawalService", "WithdrawalStatus"]
