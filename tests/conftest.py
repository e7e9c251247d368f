"""Pytest fixtures for minting engine tests.

Common fixtures: a collection matching the default config (cost 10,
max supply 25, 5 per call), a controllable clock, and a config file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from src import config as config_module
from src.minting.collection import Collection
from tests.testing_utils import (
    ACTIVATION_TIME,
    BASE_URI,
    COST,
    MAX_MINT_PER_CALL,
    MAX_SUPPLY,
    OWNER,
    VirtualClock,
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "feature(name): mark test as belonging to a feature. "
        "Usage: @pytest.mark.feature('whitelist')"
    )


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add custom command-line options."""
    parser.addoption(
        "--feature",
        action="store",
        type=str,
        default=None,
        help="Run tests for a specific feature (e.g., --feature whitelist)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Filter tests based on command-line options."""
    feature_filter = config.getoption("--feature")
    if feature_filter is None:
        return
    selected = []
    deselected = []
    for item in items:
        marker = item.get_closest_marker("feature")
        if marker is not None:
            feature_name = marker.args[0] if marker.args else ""
            if feature_name == feature_filter:
                selected.append(item)
                continue
        deselected.append(item)
    config.hook.pytest_deselected(items=deselected)
    items[:] = selected


@pytest.fixture
def clock() -> VirtualClock:
    """Clock set exactly at the activation time."""
    return VirtualClock(ACTIVATION_TIME)


@pytest.fixture
def collection(clock: VirtualClock) -> Collection:
    """Fresh collection, open for minting, whitelist mode off."""
    return Collection(
        owner=OWNER,
        name="Dapp Punks",
        symbol="DP",
        cost=COST,
        max_supply=MAX_SUPPLY,
        max_mint_per_call=MAX_MINT_PER_CALL,
        activation_time=ACTIVATION_TIME,
        base_uri=BASE_URI,
        clock=clock,
    )


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a small valid config.yaml and return its path."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "collection:\n"
        f"  owner: {OWNER}\n"
        f"  cost: {COST}\n"
        f"  max_supply: {MAX_SUPPLY}\n"
        f"  max_mint_per_call: {MAX_MINT_PER_CALL}\n"
        "  activation_time: 0\n"
        f"  base_uri: \"{BASE_URI}\"\n"
        "whitelist:\n"
        "  enabled: false\n"
        "  addresses: [alice]\n"
        "logging:\n"
        f"  output_file: \"{tmp_path / 'events.jsonl'}\"\n"
        "  default_recent: 3\n"
    )
    return path


@pytest.fixture(autouse=True)
def _reset_loaded_config() -> Iterator[None]:
    """Each test starts with no config loaded."""
    config_module.reset_config()
    yield
    config_module.reset_config()
