"""Transaction use cases."""

from yard.application.usecase.transaction.cancel_transaction import (
    CancelTransactionRequest,
    CancelTransactionUseCase,
)
from yard.application.usecase.transaction.common import TransactionResponse
from yard.application.usecase.transaction.confirm_transaction import (
    ConfirmTransactionRequest,
    ConfirmTransactionUseCase,
)
from yard.application.usecase.transaction.dispute_transaction import (
    DisputeTransactionRequest,
    DisputeTransactionUseCase,
)
from yard.application.usecase.transaction.get_pending_transactions import (
    GetPendingTransactionsRequest,
    GetPendingTransactionsResponse,
    GetPendingTransactionsUseCase,
    PendingTransactionItem,
)
from yard.application.usecase.transaction.log_time import (
    LogTimeRequest,
    LogTimeResponse,
    LogTimeUseCase,
)
from yard.application.usecase.transaction.nudge_transaction import (
    NudgeTransactionRequest,
    NudgeTransactionResponse,
    NudgeTransactionUseCase,
)

__all__ = [
    "CancelTransactionRequest",
    "CancelTransactionUseCase",
    "ConfirmTransactionRequest",
    "ConfirmTransactionUseCase",
    "DisputeTransactionRequest",
    "DisputeTransactionUseCase",
    "GetPendingTransactionsRequest",
    "GetPendingTransactionsResponse",
    "GetPendingTransactionsUseCase",
    "LogTimeRequest",
    "LogTimeResponse",
    "LogTimeUseCase",
    "NudgeTransactionRequest",
    "NudgeTransactionResponse",
    "NudgeTransactionUseCase",
    "PendingTransactionItem",
    "TransactionResponse",
]
