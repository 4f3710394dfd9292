"""Withdrawal requests."""

from decimal import Decimal, InvalidOperation

from rewards.errors import InputValidationError
from rewards.logging_config import get_logger
from rewards.storage.client import WITHDRAWAL_REQUESTS, BackendClient, parse_row, parse_rows
from rewards.withdrawals.models import WithdrawalRequest, WithdrawalStatus

logger = get_logger(__name__)


class WithdrawalService:
    """Service for creating and listing withdrawal requests."""

    def __init__(self, backend: BackendClient):
        self.backend = backend
        self.logger = get_logger(__name__)

    async def create_withdrawal_request(
        self,
        user_id: str,
        amount: Decimal | int | float,
        payment_method: str,
    ) -> WithdrawalRequest | None:
        """Create a pending withdrawal request.

        Args:
            user_id: Requesting user
            amount: Amount to withdraw, must be positive
            payment_method: Payment method reference

        Returns:
            The stored request when the backend echoes it, else None

        Raises:
            InputValidationError: If amount is not positive or payment method empty
            BackendError: If the insert fails
        """
        try:
            value = Decimal(str(amount))
        except InvalidOperation:
            raise InputValidationError.single("amount", "decimal", "Amount must be a number") from None
        if not value.is_finite() or value <= 0:
            raise InputValidationError.single("amount", "positive", "Amount must be greater than zero")
        if not payment_method:
            raise InputValidationError.single("payment_method", "required", "Payment method is required")

        rows = await self.backend.execute(
            self.backend.table(WITHDRAWAL_REQUESTS).insert(
                [
                    {
                        "user_id": user_id,
                        "amount": str(value),
                        "payment_method": payment_method,
                        "status": WithdrawalStatus.PENDING.value,
                    }
                ]
            ),
            operation=f"{WITHDRAWAL_REQUESTS}.insert",
        )

        self.logger.info(
            "withdrawal_requested",
            user_id=user_id,
            amount=str(value),
            payment_method=payment_method,
        )

        if rows:
            return parse_row(WithdrawalRequest, rows[0], operation=f"{WITHDRAWAL_REQUESTS}.insert")
        return None

    async def get_withdrawal_history(self, user_id: str) -> list[WithdrawalRequest]:
        """List a user's withdrawal requests, newest first."""
        rows = await self.backend.execute(
            self.backend.table(WITHDRAWAL_REQUESTS)
            .select("*")
            .eq("user_id", user_id)
            .order("created_at", desc=True),
            operation=f"{WITHDRAWAL_REQUESTS}.select",
        )
        return parse_rows(WithdrawalRequest, rows, operation=f"{WITHDRAWAL_REQUESTS}.select")
