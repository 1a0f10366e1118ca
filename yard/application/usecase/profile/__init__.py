"""Profile use cases."""

from yard.application.usecase.profile.confirm_account import (
    ConfirmAccountRequest,
    ConfirmAccountResponse,
    ConfirmAccountUseCase,
)
from yard.application.usecase.profile.get_balance import (
    GetBalanceRequest,
    GetBalanceResponse,
    GetBalanceUseCase,
)
from yard.application.usecase.profile.get_current_profile import (
    GetCurrentProfileRequest,
    GetCurrentProfileResponse,
    GetCurrentProfileUseCase,
)
from yard.application.usecase.profile.stage_pending_profile import (
    StagePendingProfileRequest,
    StagePendingProfileResponse,
    StagePendingProfileUseCase,
)

__all__ = [
    "ConfirmAccountRequest",
    "ConfirmAccountResponse",
    "ConfirmAccountUseCase",
    "GetBalanceRequest",
    "GetBalanceResponse",
    "GetBalanceUseCase",
    "GetCurrentProfileRequest",
    "GetCurrentProfileResponse",
    "GetCurrentProfileUseCase",
    "StagePendingProfileRequest",
    "StagePendingProfileResponse",
    "StagePendingProfileUseCase",
]
