from __future__ import annotations

from hivecore.engine.registry import PluginRegistry


def build_registry() -> PluginRegistry:
    """Create a registry holding every built-in game."""
    from hivecore.games.hive.plugin import HivePlugin

    registry = PluginRegistry()
    registry.register(HivePlugin())
    return registry
