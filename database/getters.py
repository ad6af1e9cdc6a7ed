"""
Database Getters for Imposter Party.

Contains all read operations. Every function takes the caller's session so that
reads and writes of one game operation share a single transaction.
"""

import logging
from typing import List, Optional

from .models import Game, Player, Category

logger = logging.getLogger(__name__)

# ==============================================================================
# GAME GETTERS
# ==============================================================================

def get_game_by_id(session, game_id: int, for_update: bool = False) -> Optional[Game]:
    """
    Get a game by its ID.

    Args:
        session: Database session
        game_id: Game primary key
        for_update: Lock the row until the transaction ends (no-op on SQLite)
    """
    query = session.query(Game).filter_by(id=game_id)
    if for_update:
        query = query.with_for_update()
    return query.first()

def get_game_by_code(session, game_code: str) -> Optional[Game]:
    """Get a game by its join code (case insensitive)."""
    return session.query(Game).filter_by(game_code=game_code.strip().upper()).first()

def is_game_code_taken(session, game_code: str) -> bool:
    """Check if a game code is already in use."""
    return session.query(Game.id).filter_by(game_code=game_code).first() is not None

# ==============================================================================
# PLAYER GETTERS
# ==============================================================================

def get_player_by_id(session, player_id: int) -> Optional[Player]:
    """Get a player by their ID, active or not."""
    return session.query(Player).filter_by(id=player_id).first()

def get_active_players(session, game_id: int) -> List[Player]:
    """Get the roster of a game: active players ordered by index."""
    return session.query(Player)\
        .filter_by(game_id=game_id, is_active=True)\
        .order_by(Player.index.asc(), Player.id.asc())\
        .all()

# ==============================================================================
# CATEGORY GETTERS
# ==============================================================================

def get_all_categories(session) -> List[Category]:
    """Get every category in the catalog, ordered by name."""
    return session.query(Category).order_by(Category.name.asc()).all()

def get_categories_by_names(session, names: List[str]) -> List[Category]:
    """Get the categories whose name is in the given list."""
    if not names:
        return []
    return session.query(Category)\
        .filter(Category.name.in_(names))\
        .order_by(Category.name.asc())\
        .all()
