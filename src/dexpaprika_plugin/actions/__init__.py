"""
Host-facing actions for the DexPaprika plugin.

Usage:
    from dexpaprika_plugin.actions import build_registry

    registry = build_registry()
    envelope = await registry.execute("getTopPools", {"limit": 5}, runtime)
"""

from .registry import Action, ActionParams, ActionRegistry
from .definitions import ACTIONS, build_registry
from .presenters import render_text

__all__ = [
    "Action",
    "ActionParams",
    "ActionRegistry",
    "ACTIONS",
    "build_registry",
    "render_text",
]
