from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hivecore.engine.errors import InvalidPluginError
from hivecore.engine.validation import validate_plugin

if TYPE_CHECKING:
    from hivecore.engine.protocol import GamePlugin

logger = logging.getLogger(__name__)


class PluginRegistry:
    """Holds the game plugins a host can start, keyed by game_id.

    Plugins are sanity-checked with ``validate_plugin`` before they are
    accepted, so a registered plugin can always set up a game.
    """

    def __init__(self) -> None:
        self._plugins: dict[str, GamePlugin] = {}

    def __contains__(self, game_id: str) -> bool:
        return game_id in self._plugins

    def register(self, plugin: GamePlugin, *, validate: bool = True) -> None:
        """Add *plugin*.

        Raises ValueError if its game_id is taken and InvalidPluginError if it
        fails validation.
        """
        game_id = getattr(plugin, "game_id", type(plugin).__name__)
        if game_id in self._plugins:
            raise ValueError(f"Game '{game_id}' already registered")
        if validate:
            problems = validate_plugin(plugin)
            if problems:
                logger.warning(f"Rejected game plugin {game_id}: {problems}")
                raise InvalidPluginError(game_id, problems)
        self._plugins[game_id] = plugin
        logger.info(f"Registered game plugin: {game_id}")

    def get(self, game_id: str) -> GamePlugin:
        if game_id not in self._plugins:
            raise KeyError(f"Unknown game: {game_id}")
        return self._plugins[game_id]

    def list_games(self) -> list[dict]:
        return [
            {
                "game_id": p.game_id,
                "display_name": p.display_name,
                "min_players": p.min_players,
                "max_players": p.max_players,
                "description": p.description,
                "config_schema": p.config_schema,
            }
            for p in self._plugins.values()
        ]
