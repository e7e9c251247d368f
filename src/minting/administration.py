"""Owner-only administration of gate parameters and funds.

Every operation checks the caller against the owner first and raises
UnauthorizedError before touching any state.
"""

from __future__ import annotations

import logging
from typing import Iterable

from .errors import TransferFailedError, UnauthorizedError, require_integer
from .events import (
    ADDED_TO_WHITELIST,
    PAUSE_STATE_CHANGED,
    REMOVED_FROM_WHITELIST,
    WHITELIST_ONLY_TOGGLED,
    WITHDRAW,
    NotificationLog,
)
from .state import AllowList, IssuanceConfig
from .treasury import Treasury

logger = logging.getLogger(__name__)


class Administration:
    """Mutations of gate parameters, allow-list membership and funds.

    Dependencies:
        config: Gate parameters being administered
        allow_list: Allow-list membership
        treasury: Held funds, for withdraw
        notifications: Where state-change notifications go
        owner: The single identity allowed to call any of this
    """

    def __init__(
        self,
        config: IssuanceConfig,
        allow_list: AllowList,
        treasury: Treasury,
        notifications: NotificationLog,
        owner: str,
    ) -> None:
        self._config = config
        self._allow_list = allow_list
        self._treasury = treasury
        self._notifications = notifications
        self.owner = owner

    def require_owner(self, caller: str) -> None:
        if caller != self.owner:
            logger.debug("Rejected admin call from non-owner %s", caller)
            raise UnauthorizedError(f"'{caller}' is not the owner", caller=caller)

    # ===== Pause =====

    def pause(self, caller: str) -> None:
        self._set_paused(caller, True)

    def unpause(self, caller: str) -> None:
        self._set_paused(caller, False)

    def _set_paused(self, caller: str, paused: bool) -> None:
        self.require_owner(caller)
        self._config.paused = paused
        self._notifications.emit(PAUSE_STATE_CHANGED, paused=paused)
        logger.info("Minting %s by %s", "paused" if paused else "unpaused", caller)

    # ===== Whitelist =====

    def toggle_whitelist_only(self, caller: str) -> bool:
        """Flip whitelist mode. Returns the new value."""
        self.require_owner(caller)
        self._config.whitelist_only = not self._config.whitelist_only
        self._notifications.emit(
            WHITELIST_ONLY_TOGGLED, whitelist_only=self._config.whitelist_only
        )
        return self._config.whitelist_only

    def add_to_whitelist(self, caller: str, address: str) -> None:
        self.require_owner(caller)
        self._allow_list.set(address, True)
        self._notifications.emit(ADDED_TO_WHITELIST, address=address)

    def add_many_to_whitelist(self, caller: str, addresses: Iterable[str]) -> None:
        """Add each address in input order, one notification per address."""
        self.require_owner(caller)
        for address in list(addresses):
            self._allow_list.set(address, True)
            self._notifications.emit(ADDED_TO_WHITELIST, address=address)

    def remove_from_whitelist(self, caller: str, address: str) -> None:
        self.require_owner(caller)
        self._allow_list.set(address, False)
        self._notifications.emit(REMOVED_FROM_WHITELIST, address=address)

    # ===== Pricing and limits =====

    def set_cost(self, caller: str, cost: int) -> None:
        self.require_owner(caller)
        require_integer("cost", cost, minimum=0)
        self._config.cost = cost

    def set_max_mint_per_call(self, caller: str, max_mint_per_call: int) -> None:
        self.require_owner(caller)
        require_integer("max_mint_per_call", max_mint_per_call, minimum=0)
        self._config.max_mint_per_call = max_mint_per_call

    # ===== Funds =====

    def withdraw(self, caller: str) -> int:
        """Pay the whole held balance to the owner.

        Returns:
            Amount withdrawn

        Raises:
            TransferFailedError: Payout failed; balance is unchanged
        """
        self.require_owner(caller)
        amount = self._treasury.balance
        try:
            paid = self._treasury.withdraw_all(self.owner)
        except Exception as e:
            logger.warning("Withdraw of %d to %s raised: %s", amount, self.owner, e)
            raise TransferFailedError(
                f"Transfer of {amount} to owner failed: {e}", amount=amount
            ) from e
        if paid is None:
            logger.warning("Withdraw of %d to %s failed", amount, self.owner)
            raise TransferFailedError(
                f"Transfer of {amount} to owner failed", amount=amount
            )
        self._notifications.emit(WITHDRAW, amount=paid, owner=self.owner)
        return paid
