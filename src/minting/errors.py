"""Error taxonomy for mint and administration failures.

Every failure in the issuance engine is raised as a subclass of
MintingError. Errors are terminal: the whole requested operation is
rejected with no partial effect, and nothing is retried automatically.

Each error carries a machine-readable code and a category so callers
(the CLI, or any transport wrapped around a Collection) can switch on
them, and can be rendered as a standard error response dict.

Usage:
    from src.minting.errors import MintingError, ErrorCode

    try:
        collection.mint("alice", 2, payment=20)
    except MintingError as e:
        if e.code is ErrorCode.PAUSED:
            ...
        print(e.to_response())
"""

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Categories for error classification.

    - VALIDATION: Caller provided bad input (zero quantity, low payment)
    - PERMISSION: Caller not authorized or not admitted
    - RESOURCE: Supply or token lookups out of range
    - EXECUTION: A collaborator (registry, payout) failed
    """

    VALIDATION = "validation"
    PERMISSION = "permission"
    RESOURCE = "resource"
    EXECUTION = "execution"


class ErrorCode(str, Enum):
    """Specific error codes for programmatic handling."""

    # Admission gate, in evaluation order
    PAUSED = "paused"
    NOT_WHITELISTED = "not_whitelisted"
    NOT_YET_ACTIVE = "not_yet_active"
    ZERO_QUANTITY = "zero_quantity"
    INSUFFICIENT_PAYMENT = "insufficient_payment"
    EXCEEDS_PER_CALL_LIMIT = "exceeds_per_call_limit"
    EXCEEDS_MAX_SUPPLY = "exceeds_max_supply"

    # Issuance
    ISSUANCE_FAILED = "issuance_failed"
    DUPLICATE_TOKEN = "duplicate_token"

    # Administration
    UNAUTHORIZED = "unauthorized"
    TRANSFER_FAILED = "transfer_failed"
    INVALID_ARGUMENT = "invalid_argument"

    # Reads
    TOKEN_NOT_FOUND = "token_not_found"


@dataclass
class ErrorResponse:
    """Standardized error response.

    This schema matches the {"success": False, "error": "message"} shape
    used for every rejected call.
    """

    success: bool = False  # Always False for errors
    error: str = ""  # Human-readable message
    code: str = ""  # Machine-readable error code
    category: str = ""  # Error category (validation, permission, etc.)
    retriable: bool = False  # Never True: no failure here is retryable
    details: dict[str, object] | None = None  # Optional additional context

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        result: dict[str, object] = {
            "success": self.success,
            "error": self.error,
            "code": self.code,
            "category": self.category,
            "retriable": self.retriable,
        }
        if self.details:
            result["details"] = self.details
        return result


class MintingError(Exception):
    """Base class for every rejected mint, read, or administration call."""

    code: ErrorCode = ErrorCode.ISSUANCE_FAILED
    category: ErrorCategory = ErrorCategory.EXECUTION
    retriable: bool = False

    def __init__(self, message: str, **details: object) -> None:
        self.message = message
        self.details = dict(details)
        super().__init__(message)

    def to_response(self) -> dict[str, object]:
        """Render as a standard error response dict."""
        return ErrorResponse(
            error=self.message,
            code=self.code.value,
            category=self.category.value,
            retriable=self.retriable,
            details=self.details or None,
        ).to_dict()


# ===== Admission gate =====


class PausedError(MintingError):
    """Minting is paused by the owner."""

    code = ErrorCode.PAUSED
    category = ErrorCategory.PERMISSION


class NotWhitelistedError(MintingError):
    """Whitelist mode is on and the caller is not on the allow-list."""

    code = ErrorCode.NOT_WHITELISTED
    category = ErrorCategory.PERMISSION


class NotYetActiveError(MintingError):
    """The activation time has not been reached."""

    code = ErrorCode.NOT_YET_ACTIVE
    category = ErrorCategory.PERMISSION


class ZeroQuantityError(MintingError):
    code = ErrorCode.ZERO_QUANTITY
    category = ErrorCategory.VALIDATION


class InsufficientPaymentError(MintingError):
    code = ErrorCode.INSUFFICIENT_PAYMENT
    category = ErrorCategory.VALIDATION


class ExceedsPerCallLimitError(MintingError):
    code = ErrorCode.EXCEEDS_PER_CALL_LIMIT
    category = ErrorCategory.VALIDATION


class ExceedsMaxSupplyError(MintingError):
    code = ErrorCode.EXCEEDS_MAX_SUPPLY
    category = ErrorCategory.RESOURCE


# ===== Issuance =====


class IssuanceFailedError(MintingError):
    """The registry rejected a record; the whole issuance was rolled back.

    Unreachable while the supply invariants hold. Seeing one means the
    registry and the supply counter disagree.
    """

    code = ErrorCode.ISSUANCE_FAILED
    category = ErrorCategory.EXECUTION


class DuplicateTokenError(MintingError):
    """Raised by the registry when a token id is already registered."""

    code = ErrorCode.DUPLICATE_TOKEN
    category = ErrorCategory.RESOURCE

    def __init__(self, token_id: int, existing_owner: str) -> None:
        self.token_id = token_id
        self.existing_owner = existing_owner
        super().__init__(
            f"Token {token_id} already registered to '{existing_owner}'",
            token_id=token_id,
            existing_owner=existing_owner,
        )


# ===== Administration =====


class UnauthorizedError(MintingError):
    """Caller is not the collection owner."""

    code = ErrorCode.UNAUTHORIZED
    category = ErrorCategory.PERMISSION


class TransferFailedError(MintingError):
    """The payout collaborator reported failure; balance is unchanged."""

    code = ErrorCode.TRANSFER_FAILED
    category = ErrorCategory.EXECUTION


class InvalidArgumentError(MintingError):
    code = ErrorCode.INVALID_ARGUMENT
    category = ErrorCategory.VALIDATION


def require_integer(name: str, value: object, minimum: int | None = None) -> None:
    """Raise InvalidArgumentError unless value is an int (not a bool) >= minimum."""
    if (
        not isinstance(value, int)
        or isinstance(value, bool)
        or (minimum is not None and value < minimum)
    ):
        kind = "an integer" if minimum is None else f"an integer >= {minimum}"
        raise InvalidArgumentError(f"{name} must be {kind}, got {value!r}", **{name: value})


# ===== Reads =====


class TokenNotFoundError(MintingError):
    code = ErrorCode.TOKEN_NOT_FOUND
    category = ErrorCategory.RESOURCE
