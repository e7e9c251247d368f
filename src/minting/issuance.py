"""Issuance transaction - create records and advance the supply counter.

Registrations are staged first. The supply counter, the treasury and
the notification log are touched only after every registration
succeeded; if any registration fails, the ones already made are undone
and IssuanceFailedError is raised.
"""

from __future__ import annotations

import logging

from .errors import IssuanceFailedError
from .events import MINT, NotificationLog
from .registry import OwnershipRegistry
from .state import IssuanceConfig
from .treasury import Treasury

logger = logging.getLogger(__name__)


def issue(
    config: IssuanceConfig,
    registry: OwnershipRegistry,
    treasury: Treasury,
    notifications: NotificationLog,
    caller: str,
    quantity: int,
    payment: int,
) -> list[int]:
    """Mint quantity records to caller. Assumes admission already passed.

    Returns:
        The new token ids, ascending

    Raises:
        IssuanceFailedError: The registry rejected a record; nothing changed
    """
    first_id = config.total_supply + 1
    token_ids = list(range(first_id, first_id + quantity))

    registered: list[int] = []
    try:
        for token_id in token_ids:
            registry.register(token_id, caller)
            registered.append(token_id)
    except Exception as e:
        for token_id in reversed(registered):
            registry.unregister(token_id)
        logger.warning(
            "Issuance of tokens %d-%d to %s rolled back after %d registrations: %s",
            token_ids[0], token_ids[-1], caller, len(registered), e,
        )
        raise IssuanceFailedError(
            f"Registry rejected token {token_ids[len(registered)]}",
            caller=caller,
            quantity=quantity,
            failed_token_id=token_ids[len(registered)],
        ) from e

    treasury.deposit(payment)
    config.total_supply += quantity
    notifications.emit(MINT, amount=quantity, minter=caller)
    logger.debug("Minted tokens %d-%d to %s", token_ids[0], token_ids[-1], caller)
    return token_ids
