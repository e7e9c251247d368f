"""Admission gate - ordered preconditions for a mint request.

The checks run in a fixed order and the first violation wins, so a
request that is both underpaid and sent while paused reports Paused.
Nothing here mutates state; the caller holds the collection lock so all
checks see the same snapshot.
"""

from __future__ import annotations

import logging

from .errors import (
    ExceedsMaxSupplyError,
    ExceedsPerCallLimitError,
    InsufficientPaymentError,
    MintingError,
    NotWhitelistedError,
    NotYetActiveError,
    PausedError,
    ZeroQuantityError,
)
from .state import AllowList, IssuanceConfig

logger = logging.getLogger(__name__)


def required_payment(config: IssuanceConfig, quantity: int) -> int:
    """Total price for quantity records at the current cost."""
    return config.cost * quantity


def check_admission(
    config: IssuanceConfig,
    allow_list: AllowList,
    caller: str,
    quantity: int,
    payment: int,
    now: int,
) -> None:
    """Raise the first violated precondition, or return if admitted.

    Order: paused, allow-list, activation time, zero quantity, payment,
    per-call limit, supply cap. Payment above the price is accepted.

    Raises:
        MintingError: One of the admission error kinds
    """
    try:
        _check(config, allow_list, caller, quantity, payment, now)
    except MintingError as e:
        logger.debug("Mint of %d by %s rejected: %s", quantity, caller, e.code.value)
        raise


def _check(
    config: IssuanceConfig,
    allow_list: AllowList,
    caller: str,
    quantity: int,
    payment: int,
    now: int,
) -> None:
    if config.paused:
        raise PausedError("Minting is paused")

    if config.whitelist_only and not allow_list.contains(caller):
        raise NotWhitelistedError(
            f"'{caller}' is not on the whitelist", caller=caller
        )

    if now < config.activation_time:
        raise NotYetActiveError(
            "Minting is not active yet",
            now=now,
            activation_time=config.activation_time,
        )

    if quantity <= 0:
        raise ZeroQuantityError("Must mint at least 1 token", quantity=quantity)

    price = required_payment(config, quantity)
    if payment < price:
        raise InsufficientPaymentError(
            f"Payment {payment} is below the required {price}",
            payment=payment,
            required=price,
        )

    if quantity > config.max_mint_per_call:
        raise ExceedsPerCallLimitError(
            "Cannot mint more than max mint amount",
            quantity=quantity,
            max_mint_per_call=config.max_mint_per_call,
        )

    if config.total_supply + quantity > config.max_supply:
        raise ExceedsMaxSupplyError(
            f"Minting {quantity} would exceed max supply of {config.max_supply}",
            quantity=quantity,
            total_supply=config.total_supply,
            max_supply=config.max_supply,
        )
