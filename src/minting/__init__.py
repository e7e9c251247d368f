# Minting engine package
from .collection import Collection, system_clock
from .state import IssuanceConfig, AllowList
from .registry import OwnershipRegistry
from .treasury import Treasury, Payout, accept_all_payouts
from .events import Notification, NotificationLog
from .logger import EventLogger
from .admission import check_admission, required_payment
from .issuance import issue
from .administration import Administration
from .errors import (
    ErrorCategory, ErrorCode, ErrorResponse, MintingError,
    PausedError, NotWhitelistedError, NotYetActiveError, ZeroQuantityError,
    InsufficientPaymentError, ExceedsPerCallLimitError, ExceedsMaxSupplyError,
    IssuanceFailedError, DuplicateTokenError, UnauthorizedError,
    TransferFailedError, InvalidArgumentError, TokenNotFoundError,
)

__all__ = [
    "Collection", "system_clock",
    "IssuanceConfig", "AllowList",
    "OwnershipRegistry",
    "Treasury", "Payout", "accept_all_payouts",
    "Notification", "NotificationLog",
    "EventLogger",
    "check_admission", "required_payment",
    "issue",
    "Administration",
    # Errors
    "ErrorCategory", "ErrorCode", "ErrorResponse", "MintingError",
    "PausedError", "NotWhitelistedError", "NotYetActiveError", "ZeroQuantityError",
    "InsufficientPaymentError", "ExceedsPerCallLimitError", "ExceedsMaxSupplyError",
    "IssuanceFailedError", "DuplicateTokenError", "UnauthorizedError",
    "TransferFailedError", "InvalidArgumentError", "TokenNotFoundError",
]
