"""End-to-end mint scenarios against a Collection.

Covers supply cap, id density, per-call limit, allow-list and pause
flows, activation time, overpayment retention, metadata URIs and
concurrent minting.
"""

import threading

import pytest

from src.minting.collection import Collection
from src.minting.errors import (
    ExceedsMaxSupplyError,
    ExceedsPerCallLimitError,
    InvalidArgumentError,
    IssuanceFailedError,
    MintingError,
    NotWhitelistedError,
    NotYetActiveError,
    PausedError,
    TokenNotFoundError,
    ZeroQuantityError,
)
from src.minting.events import MINT
from tests.testing_utils import (
    ACTIVATION_TIME,
    BASE_URI,
    COST,
    MAX_MINT_PER_CALL,
    MAX_SUPPLY,
    MINTER,
    OTHER,
    OWNER,
    FaultyRegistry,
    VirtualClock,
)


class TestMaxMintAmount:
    """Per-call limit, as configured at deployment."""

    def test_sets_the_maximum_mint_amount(self, collection: Collection) -> None:
        assert collection.max_mint_per_call == MAX_MINT_PER_CALL

    def test_allows_minting_up_to_the_maximum(self, collection: Collection) -> None:
        ids = collection.mint(MINTER, MAX_MINT_PER_CALL, payment=COST * MAX_MINT_PER_CALL)

        assert ids == [1, 2, 3, 4, 5]
        assert collection.balance_of(MINTER) == MAX_MINT_PER_CALL

    def test_rejects_more_than_the_maximum(self, collection: Collection) -> None:
        quantity = MAX_MINT_PER_CALL + 1
        with pytest.raises(ExceedsPerCallLimitError, match="Cannot mint more than max mint amount"):
            collection.mint(MINTER, quantity, payment=COST * quantity)

    def test_rejects_more_than_the_maximum_regardless_of_payment(self, collection: Collection) -> None:
        with pytest.raises(ExceedsPerCallLimitError):
            collection.mint(MINTER, 6, payment=10**9)
        assert collection.total_supply == 0

    def test_lowered_limit_applies_to_next_mint(self, collection: Collection) -> None:
        collection.set_max_mint_per_call(OWNER, 2)
        with pytest.raises(ExceedsPerCallLimitError):
            collection.mint(MINTER, 3, payment=3 * COST)
        assert collection.mint(MINTER, 2, payment=2 * COST) == [1, 2]


class TestSupplyCap:
    def test_mint_out_then_reject(self, collection: Collection) -> None:
        for _ in range(MAX_SUPPLY // MAX_MINT_PER_CALL):
            collection.mint(MINTER, MAX_MINT_PER_CALL, payment=COST * MAX_MINT_PER_CALL)
        assert collection.total_supply == MAX_SUPPLY

        before = collection.snapshot()
        with pytest.raises(ExceedsMaxSupplyError):
            collection.mint(OTHER, 1, payment=COST)
        assert collection.snapshot() == before

    def test_partial_fit_rejected_whole(self, collection: Collection) -> None:
        for _ in range(4):
            collection.mint(MINTER, 5, payment=5 * COST)
        collection.mint(MINTER, 3, payment=3 * COST)

        with pytest.raises(ExceedsMaxSupplyError):
            collection.mint(OTHER, 3, payment=3 * COST)
        assert collection.total_supply == 23
        assert collection.mint(OTHER, 2, payment=2 * COST) == [24, 25]

    def test_ids_dense_across_minters(self, collection: Collection) -> None:
        collection.mint("a", 2, payment=2 * COST)
        collection.mint("b", 5, payment=5 * COST)
        collection.mint("a", 1, payment=COST)

        assert collection.tokens_owned_by("a") == [1, 2, 8]
        assert collection.tokens_owned_by("b") == [3, 4, 5, 6, 7]
        minted = sorted(collection.tokens_owned_by("a") + collection.tokens_owned_by("b"))
        assert minted == list(range(1, collection.total_supply + 1))


@pytest.mark.feature("whitelist")
class TestWhitelistFlow:
    def test_listed_mints_unlisted_rejected_until_toggle(self, collection: Collection) -> None:
        collection.toggle_whitelist_only(OWNER)
        collection.add_to_whitelist(OWNER, "A")

        assert collection.mint("A", 1, payment=COST) == [1]
        with pytest.raises(NotWhitelistedError):
            collection.mint("B", 1, payment=COST)

        collection.toggle_whitelist_only(OWNER)
        assert collection.mint("B", 1, payment=COST) == [2]

    def test_initial_whitelist_mode(self, clock: VirtualClock) -> None:
        collection = Collection(
            OWNER, "DP", "DP", COST, MAX_SUPPLY, MAX_MINT_PER_CALL, ACTIVATION_TIME,
            whitelist_only=True, whitelisted=["A"], clock=clock,
        )
        assert collection.mint("A", 1, payment=COST) == [1]
        with pytest.raises(NotWhitelistedError):
            collection.mint("B", 1, payment=COST)


@pytest.mark.feature("pause")
class TestPauseFlow:
    def test_pause_blocks_everyone_then_unpause(self, collection: Collection) -> None:
        collection.toggle_whitelist_only(OWNER)
        collection.add_to_whitelist(OWNER, "A")
        collection.pause(OWNER)

        with pytest.raises(PausedError):
            collection.mint("A", 1, payment=COST)
        with pytest.raises(PausedError):
            collection.mint(OWNER, 1, payment=COST)

        collection.unpause(OWNER)
        assert collection.mint("A", 1, payment=COST) == [1]

    def test_paused_and_underpaid_reports_paused(self, collection: Collection) -> None:
        collection.pause(OWNER)
        with pytest.raises(PausedError):
            collection.mint(MINTER, 1, payment=0)


class TestActivationTime:
    def test_rejected_before_then_allowed(self, collection: Collection, clock: VirtualClock) -> None:
        clock.set_time(ACTIVATION_TIME - 60)
        with pytest.raises(NotYetActiveError):
            collection.mint(MINTER, 1, payment=COST)

        clock.advance(60)
        assert collection.mint(MINTER, 1, payment=COST) == [1]


class TestFunds:
    def test_overpayment_retained(self, collection: Collection) -> None:
        collection.mint(MINTER, 2, payment=2 * COST + 7)

        assert collection.balance == 2 * COST + 7

    def test_held_funds_match_payments_minus_withdrawals(self, collection: Collection) -> None:
        payments = [(1, COST), (3, 3 * COST), (2, 2 * COST + 1)]
        for quantity, payment in payments:
            collection.mint(MINTER, quantity, payment=payment)
        withdrawn = collection.withdraw(OWNER)
        collection.mint(OTHER, 1, payment=COST)

        assert withdrawn == sum(p for _, p in payments)
        assert collection.balance == COST

    def test_failed_mint_collects_nothing(self, collection: Collection) -> None:
        with pytest.raises(MintingError):
            collection.mint(MINTER, 1, payment=COST - 1)
        assert collection.balance == 0


class TestMalformedMintArguments:
    """Quantities and payments must be plain integers in the smallest unit."""

    @pytest.mark.parametrize("quantity", [1.5, 2.0, "2", True, None])
    def test_non_integer_quantity_rejected(self, collection: Collection, quantity: object) -> None:
        before = collection.snapshot()
        with pytest.raises(InvalidArgumentError) as exc_info:
            collection.mint(MINTER, quantity, payment=100)  # type: ignore[arg-type]

        assert exc_info.value.details == {"quantity": quantity}
        assert collection.snapshot() == before

    @pytest.mark.parametrize("payment", [10.5, 20.0, -1, "10", False])
    def test_bad_payment_rejected(self, collection: Collection, payment: object) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            collection.mint(MINTER, 1, payment=payment)  # type: ignore[arg-type]

        assert exc_info.value.details == {"payment": payment}
        assert collection.total_supply == 0
        assert collection.balance == 0

    def test_balance_stays_integral(self, collection: Collection) -> None:
        collection.mint(MINTER, 1, payment=COST + 3)

        assert isinstance(collection.balance, int)
        assert collection.balance == COST + 3

    def test_negative_quantity_still_reports_zero_quantity(self, collection: Collection) -> None:
        with pytest.raises(ZeroQuantityError):
            collection.mint(MINTER, -1, payment=COST)


class TestAtomicity:
    def test_registry_fault_leaves_collection_unchanged(self, clock: VirtualClock) -> None:
        collection = Collection(
            OWNER, "DP", "DP", COST, MAX_SUPPLY, MAX_MINT_PER_CALL, ACTIVATION_TIME,
            registry=FaultyRegistry(fail_on=4), clock=clock,
        )
        collection.mint(MINTER, 2, payment=2 * COST)
        before = collection.snapshot()

        with pytest.raises(IssuanceFailedError):
            collection.mint(OTHER, 3, payment=3 * COST)

        assert collection.snapshot() == before
        assert collection.tokens_owned_by(OTHER) == []


class TestReads:
    def test_token_uri(self, collection: Collection) -> None:
        collection.mint(MINTER, 2, payment=2 * COST)

        assert collection.token_uri(1) == f"{BASE_URI}1.json"
        assert collection.token_uri(2) == f"{BASE_URI}2.json"

    @pytest.mark.parametrize("token_id", [0, 3, -1])
    def test_token_uri_out_of_range(self, collection: Collection, token_id: int) -> None:
        collection.mint(MINTER, 2, payment=2 * COST)
        with pytest.raises(TokenNotFoundError):
            collection.token_uri(token_id)

    def test_owner_of(self, collection: Collection) -> None:
        collection.mint(MINTER, 1, payment=COST)
        assert collection.owner_of(1) == MINTER
        with pytest.raises(TokenNotFoundError):
            collection.owner_of(2)

    def test_read_surface(self, collection: Collection) -> None:
        assert collection.name == "Dapp Punks"
        assert collection.symbol == "DP"
        assert collection.cost == COST
        assert collection.max_supply == MAX_SUPPLY
        assert collection.activation_time == ACTIVATION_TIME
        assert collection.paused is False
        assert collection.whitelist_only is False
        assert collection.total_supply == 0

    def test_snapshot_supply_view(self, collection: Collection) -> None:
        collection.mint("a", 2, payment=2 * COST)
        collection.mint("b", 1, payment=COST)

        state = collection.snapshot()
        assert state["token_ids"] == [1, 2, 3]
        assert state["remaining_supply"] == MAX_SUPPLY - 3
        assert state["holders"] == {"a": [1, 2], "b": [3]}
        assert [e["name"] for e in state["events"]] == [MINT, MINT]

    def test_subscribe_sees_mints(self, collection: Collection) -> None:
        seen: list[dict[str, object]] = []
        collection.subscribe(lambda n: seen.append(n.args) if n.name == MINT else None)

        collection.mint(MINTER, 2, payment=2 * COST)

        assert seen == [{"amount": 2, "minter": MINTER}]


class TestConcurrentMinting:
    def test_parallel_mints_never_exceed_cap(self, collection: Collection) -> None:
        """40 threads race for 25 tokens, 1 at a time."""
        barrier = threading.Barrier(40)
        results: list[list[int]] = []
        failures: list[MintingError] = []
        guard = threading.Lock()

        def worker(i: int) -> None:
            barrier.wait()
            try:
                ids = collection.mint(f"minter_{i}", 1, payment=COST)
            except MintingError as e:
                with guard:
                    failures.append(e)
            else:
                with guard:
                    results.append(ids)

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(40)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        minted = sorted(token_id for ids in results for token_id in ids)
        assert minted == list(range(1, MAX_SUPPLY + 1))
        assert len(failures) == 40 - MAX_SUPPLY
        assert all(isinstance(e, ExceedsMaxSupplyError) for e in failures)
        assert collection.total_supply == MAX_SUPPLY
        assert collection.balance == MAX_SUPPLY * COST
        assert len(collection.events.by_name(MINT)) == MAX_SUPPLY
