"""Minting engine source package.

This package contains:
- config: Configuration loading and management
- minting: Collection state, admission gate, issuance and administration
"""

from __future__ import annotations

__all__: list[str] = []
