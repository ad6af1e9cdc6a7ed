"""
Roster management for games.

Keeps the active players of a game in a dense, contiguous index order.
Removed players are soft-deleted and the survivors are renumbered.
"""

import logging
from typing import List, Optional

from database import (
    Player, get_active_players, get_player_by_id, create_player,
    deactivate_player, renumber_players
)
from utils.helpers import validate_player_name
from .errors import NotFound, InvalidPlayerData

logger = logging.getLogger(__name__)

class RosterManager:
    """Manages the ordered list of active players of a game."""

    def list_active(self, session, game_id: int) -> List[Player]:
        """Active players sorted by index ascending."""
        return get_active_players(session, game_id)

    def get_active_player(self, session, player_id: int) -> Player:
        """
        Get a player that is still on a roster.

        Raises:
            NotFound: if the player is absent or inactive
        """
        player = get_player_by_id(session, player_id)
        if not player or not player.is_active:
            raise NotFound(f"Player {player_id} not found", {'player_id': player_id})
        return player

    def add_player(self, session, game_id: int, name: str, color: str) -> Player:
        """
        Append a player at the end of the roster.

        Args:
            session: Database session
            game_id: Game the player joins
            name: Display name (no uniqueness constraint)
            color: Display color (no uniqueness constraint)

        Returns:
            The created player
        """
        self._validate_name(name)
        self._validate_color(color)
        next_index = len(get_active_players(session, game_id))
        player = create_player(session, game_id, name.strip(), color, next_index)
        logger.info(f"Player '{player.name}' joined game {game_id} at seat {next_index}")
        return player

    def update_player(self, session, player_id: int, name: Optional[str] = None,
                      color: Optional[str] = None) -> Player:
        """Update name and/or color; omitted fields are left alone."""
        player = self.get_active_player(session, player_id)
        if name is not None:
            self._validate_name(name)
            player.name = name.strip()
        if color is not None:
            self._validate_color(color)
            player.color = color
        logger.debug(f"Updated player {player_id}: name={player.name}, color={player.color}")
        return player

    def remove_player(self, session, player_id: int) -> Player:
        """
        Soft-delete a player and close the gap in the roster.

        The remaining players keep their relative order and are renumbered 0..n-1.
        """
        player = self.get_active_player(session, player_id)
        deactivate_player(player)
        session.flush()

        remaining = get_active_players(session, player.game_id)
        changed = renumber_players(remaining)
        logger.info(f"Removed player '{player.name}' from game {player.game_id}; "
                    f"renumbered {changed} of {len(remaining)} players")
        return player

    @staticmethod
    def _validate_name(name: str):
        is_valid, error_msg = validate_player_name(name)
        if not is_valid:
            raise InvalidPlayerData(error_msg, {'field': 'name'})

    @staticmethod
    def _validate_color(color: str):
        if not isinstance(color, str) or not color.strip():
            raise InvalidPlayerData("Player color must be a non-empty string", {'field': 'color'})
