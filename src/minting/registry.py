"""Ownership registry - who holds which token id

The issuance transaction only needs two things from the registry:
register a new token for an owner, and undo that registration if the
transaction has to roll back. The rest of the surface answers the read
queries exposed by Collection (balance, owner lookup, enumeration).

Usage:
    registry = OwnershipRegistry()

    # Register ids (raises if the id is already taken)
    registry.register(1, "alice")
    registry.register(2, "alice")

    registry.owner_of(1)           # "alice"
    registry.balance_of("alice")   # 2
    registry.tokens_owned_by("alice")  # [1, 2]

    # Roll back a registration
    registry.unregister(2)
"""

from __future__ import annotations

from .errors import DuplicateTokenError


class OwnershipRegistry:
    """In-memory token ownership registry.

    Thread-safety: This class is NOT thread-safe. The owning Collection
    serializes every call under its lock.
    """

    _owners: dict[int, str]
    _holdings: dict[str, list[int]]

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._owners = {}
        self._holdings = {}

    def register(self, token_id: int, owner: str) -> None:
        """Register a new token for an owner.

        Args:
            token_id: The token id to register
            owner: Identity receiving the token

        Raises:
            DuplicateTokenError: If the id is already registered
        """
        if token_id in self._owners:
            raise DuplicateTokenError(token_id, self._owners[token_id])
        self._owners[token_id] = owner
        self._holdings.setdefault(owner, []).append(token_id)

    def unregister(self, token_id: int) -> bool:
        """Remove a token from the registry.

        Returns:
            True if the token was removed, False if it didn't exist
        """
        owner = self._owners.pop(token_id, None)
        if owner is None:
            return False
        held = self._holdings[owner]
        held.remove(token_id)
        if not held:
            del self._holdings[owner]
        return True

    def exists(self, token_id: int) -> bool:
        return token_id in self._owners

    def owner_of(self, token_id: int) -> str | None:
        """Look up the owner of a token, None if unregistered."""
        return self._owners.get(token_id)

    def balance_of(self, owner: str) -> int:
        return len(self._holdings.get(owner, ()))

    def tokens_owned_by(self, owner: str) -> list[int]:
        """Token ids held by owner, ascending. A snapshot copy."""
        return sorted(self._holdings.get(owner, ()))

    def all_token_ids(self) -> list[int]:
        return sorted(self._owners)

    def holders(self) -> list[str]:
        """Identities holding at least one token, sorted."""
        return sorted(self._holdings)

    def count(self) -> int:
        """Get total number of registered tokens."""
        return len(self._owners)
