"""Utilities for creating stable instance identifiers."""
from __future__ import annotations

import secrets


def make_instance_id(prefix: str) -> str:
    """Generate an identifier unique to one inventory or weapon entry."""
    return f"{prefix}_{secrets.token_hex(4)}"
