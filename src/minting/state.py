"""Shared issuance state: gate parameters, supply counter and allow-list.

Both objects are plain containers. They carry no locking of their own;
the owning Collection serializes every access, and only the admission,
issuance and administration modules mutate them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable


@dataclass
class IssuanceConfig:
    """Gate parameters and the supply counter for one collection.

    max_supply is fixed at construction. total_supply only grows, and
    never past max_supply.
    """

    name: str
    symbol: str
    cost: int
    max_supply: int
    max_mint_per_call: int
    activation_time: int
    base_uri: str = ""
    uri_extension: str = ".json"
    paused: bool = False
    whitelist_only: bool = False
    total_supply: int = 0

    def __post_init__(self) -> None:
        for attr in ("cost", "max_supply", "max_mint_per_call", "activation_time", "total_supply"):
            value = getattr(self, attr)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ValueError(f"{attr} must be a non-negative integer, got {value!r}")
        if self.total_supply > self.max_supply:
            raise ValueError(
                f"total_supply ({self.total_supply}) exceeds max_supply ({self.max_supply})"
            )

    @property
    def remaining_supply(self) -> int:
        return self.max_supply - self.total_supply

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "cost": self.cost,
            "max_supply": self.max_supply,
            "max_mint_per_call": self.max_mint_per_call,
            "activation_time": self.activation_time,
            "base_uri": self.base_uri,
            "uri_extension": self.uri_extension,
            "paused": self.paused,
            "whitelist_only": self.whitelist_only,
            "total_supply": self.total_supply,
        }


@dataclass
class AllowList:
    """Identity -> membership flag. Unknown identities are not members."""

    _members: dict[str, bool] = field(default_factory=dict)

    @classmethod
    def from_addresses(cls, addresses: Iterable[str]) -> "AllowList":
        allow_list = cls()
        for address in addresses:
            allow_list.set(address, True)
        return allow_list

    def contains(self, address: str) -> bool:
        return self._members.get(address, False)

    def __contains__(self, address: object) -> bool:
        return isinstance(address, str) and self.contains(address)

    def set(self, address: str, member: bool) -> None:
        self._members[address] = member

    def members(self) -> list[str]:
        """Addresses currently flagged as members, sorted."""
        return sorted(addr for addr, member in self._members.items() if member)
