"""Collection - the single entry point for minting, administration and reads

A Collection owns the issuance state (gate parameters, supply counter,
allow-list), the ownership registry, the treasury and the notification
log. One re-entrant lock guards all of it: each mint (admission gate
followed by issuance) and each administration call runs as one critical
section, so no call ever observes another call half-way through.

Usage:
    collection = Collection(
        owner="deployer",
        name="Dapp Punks",
        symbol="DP",
        cost=10,
        max_supply=25,
        max_mint_per_call=5,
        activation_time=0,
        base_uri="ipfs://Qm.../",
    )
    collection.mint("alice", 2, payment=20)   # -> [1, 2]
    collection.pause("deployer")
    collection.token_uri(1)                   # "ipfs://Qm.../1.json"
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable, Iterable, TYPE_CHECKING

from .administration import Administration
from .admission import check_admission
from .errors import TokenNotFoundError, require_integer
from .events import NotificationLog, Observer
from .issuance import issue
from .registry import OwnershipRegistry
from .state import AllowList, IssuanceConfig
from .treasury import Payout, Treasury

if TYPE_CHECKING:
    from ..config_schema import AppConfig


Clock = Callable[[], int]


def system_clock() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


class Collection:
    """A fixed-cap, allow-listed, pausable, priced token collection.

    Dependencies (all optional, defaults are in-memory):
        registry: Token ownership records
        payout: Fund transfer callable used by withdraw
        clock: Returns the current unix time for the activation gate
    """

    config: IssuanceConfig
    allow_list: AllowList
    registry: OwnershipRegistry
    treasury: Treasury
    events: NotificationLog

    def __init__(
        self,
        owner: str,
        name: str,
        symbol: str,
        cost: int,
        max_supply: int,
        max_mint_per_call: int,
        activation_time: int,
        base_uri: str = "",
        *,
        uri_extension: str = ".json",
        whitelist_only: bool = False,
        whitelisted: Iterable[str] = (),
        registry: OwnershipRegistry | None = None,
        payout: Payout | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.config = IssuanceConfig(
            name=name,
            symbol=symbol,
            cost=cost,
            max_supply=max_supply,
            max_mint_per_call=max_mint_per_call,
            activation_time=activation_time,
            base_uri=base_uri,
            uri_extension=uri_extension,
            whitelist_only=whitelist_only,
        )
        self.allow_list = AllowList.from_addresses(whitelisted)
        self.registry = registry if registry is not None else OwnershipRegistry()
        self.treasury = Treasury(payout)
        self.events = NotificationLog()
        self._clock = clock or system_clock
        self._admin = Administration(
            self.config, self.allow_list, self.treasury, self.events, owner
        )
        self._lock = threading.RLock()

    @classmethod
    def from_config(
        cls,
        config: "AppConfig",
        *,
        owner: str | None = None,
        registry: OwnershipRegistry | None = None,
        payout: Payout | None = None,
        clock: Clock | None = None,
    ) -> "Collection":
        """Create a Collection from validated app config.

        Args:
            config: Validated AppConfig
            owner: Overrides collection.owner from config
            registry: Optional registry (default: fresh in-memory)
            payout: Optional payout callable (default: always succeeds)
            clock: Optional time source (default: system time)
        """
        c = config.collection
        return cls(
            owner=owner or c.owner,
            name=c.name,
            symbol=c.symbol,
            cost=c.cost,
            max_supply=c.max_supply,
            max_mint_per_call=c.max_mint_per_call,
            activation_time=c.activation_time,
            base_uri=c.base_uri,
            uri_extension=c.uri_extension,
            whitelist_only=config.whitelist.enabled,
            whitelisted=config.whitelist.addresses,
            registry=registry,
            payout=payout,
            clock=clock,
        )

    # ===== MINT =====

    def mint(self, caller: str, quantity: int, payment: int = 0) -> list[int]:
        """Mint quantity tokens to caller, paying payment.

        Payment above cost * quantity is kept. On any failure nothing
        changes and the error is raised.

        Returns:
            The new token ids, ascending

        Raises:
            InvalidArgumentError: quantity is not an integer, or payment
                is not a non-negative integer
            MintingError: The first violated admission check, or
                IssuanceFailedError if the registry rejected a record
        """
        require_integer("quantity", quantity)
        require_integer("payment", payment, minimum=0)
        with self._lock:
            check_admission(
                self.config, self.allow_list, caller, quantity, payment, self._clock()
            )
            return issue(
                self.config, self.registry, self.treasury, self.events,
                caller, quantity, payment,
            )

    # ===== ADMINISTRATION (owner only) =====

    def pause(self, caller: str) -> None:
        with self._lock:
            self._admin.pause(caller)

    def unpause(self, caller: str) -> None:
        with self._lock:
            self._admin.unpause(caller)

    def toggle_whitelist_only(self, caller: str) -> bool:
        with self._lock:
            return self._admin.toggle_whitelist_only(caller)

    def add_to_whitelist(self, caller: str, address: str) -> None:
        with self._lock:
            self._admin.add_to_whitelist(caller, address)

    def add_many_to_whitelist(self, caller: str, addresses: Iterable[str]) -> None:
        with self._lock:
            self._admin.add_many_to_whitelist(caller, addresses)

    def remove_from_whitelist(self, caller: str, address: str) -> None:
        with self._lock:
            self._admin.remove_from_whitelist(caller, address)

    def set_cost(self, caller: str, cost: int) -> None:
        with self._lock:
            self._admin.set_cost(caller, cost)

    def set_max_mint_per_call(self, caller: str, max_mint_per_call: int) -> None:
        with self._lock:
            self._admin.set_max_mint_per_call(caller, max_mint_per_call)

    def withdraw(self, caller: str) -> int:
        """Pay the entire held balance to the owner. Returns the amount."""
        with self._lock:
            return self._admin.withdraw(caller)

    # ===== READS =====

    @property
    def owner(self) -> str:
        return self._admin.owner

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def symbol(self) -> str:
        return self.config.symbol

    @property
    def cost(self) -> int:
        with self._lock:
            return self.config.cost

    @property
    def max_supply(self) -> int:
        return self.config.max_supply

    @property
    def max_mint_per_call(self) -> int:
        with self._lock:
            return self.config.max_mint_per_call

    @property
    def activation_time(self) -> int:
        return self.config.activation_time

    @property
    def paused(self) -> bool:
        with self._lock:
            return self.config.paused

    @property
    def whitelist_only(self) -> bool:
        with self._lock:
            return self.config.whitelist_only

    @property
    def total_supply(self) -> int:
        with self._lock:
            return self.config.total_supply

    @property
    def balance(self) -> int:
        """Funds currently held by the collection."""
        with self._lock:
            return self.treasury.balance

    def is_address_whitelisted(self, address: str) -> bool:
        with self._lock:
            return self.allow_list.contains(address)

    def balance_of(self, address: str) -> int:
        with self._lock:
            return self.registry.balance_of(address)

    def tokens_owned_by(self, address: str) -> list[int]:
        """Token ids held by address, ascending, as of this call."""
        with self._lock:
            return self.registry.tokens_owned_by(address)

    def owner_of(self, token_id: int) -> str:
        with self._lock:
            self._require_minted(token_id)
            owner = self.registry.owner_of(token_id)
        # Minted ids are always registered unless the registry was swapped out
        if owner is None:
            raise TokenNotFoundError(f"Token {token_id} is not registered", token_id=token_id)
        return owner

    def token_uri(self, token_id: int) -> str:
        """Metadata location: base_uri + id + uri_extension."""
        with self._lock:
            self._require_minted(token_id)
            return f"{self.config.base_uri}{token_id}{self.config.uri_extension}"

    def _require_minted(self, token_id: int) -> None:
        if not 1 <= token_id <= self.config.total_supply:
            raise TokenNotFoundError(
                f"Token {token_id} does not exist",
                token_id=token_id,
                total_supply=self.config.total_supply,
            )

    # ===== NOTIFICATIONS =====

    def subscribe(self, observer: Observer) -> None:
        self.events.subscribe(observer)

    def snapshot(self) -> dict[str, Any]:
        """JSON-serializable view of the whole collection state."""
        with self._lock:
            holders = {
                holder: self.registry.tokens_owned_by(holder)
                for holder in self.registry.holders()
            }
            return {
                "owner": self.owner,
                **self.config.to_dict(),
                "remaining_supply": self.config.remaining_supply,
                "token_ids": self.registry.all_token_ids(),
                "balance": self.treasury.balance,
                "total_deposited": self.treasury.total_deposited,
                "total_withdrawn": self.treasury.total_withdrawn,
                "whitelist": self.allow_list.members(),
                "holders": holders,
                "events": [n.to_dict() for n in self.events.records],
            }
