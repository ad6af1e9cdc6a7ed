"""
Database Setters for Imposter Party.

Contains all write operations. Every function takes the caller's session;
commit and rollback belong to get_db_session().
"""

import logging
from typing import Optional, List, Dict, Any

from .models import Game, Player, Category

logger = logging.getLogger(__name__)

# ==============================================================================
# GAME SETTERS
# ==============================================================================

def create_game(session, game_code: str, settings: Dict[str, Any], total_rounds: int) -> Game:
    """Create a new game in the lobby state."""
    game = Game(
        game_code=game_code,
        status='lobby',
        current_player_index=0,
        current_round=1,
        total_rounds=total_rounds,
        selected_categories=[],
        imposter_indices=[],
        settings=settings
    )
    session.add(game)
    session.flush()  # Get the ID without committing
    logger.info(f"Created game: {game_code}")
    return game

def patch_game(game: Game, **fields) -> Game:
    """
    Partially update a game.

    Omitted fields are untouched; a field passed as None is cleared.
    """
    for name, value in fields.items():
        if not hasattr(Game, name):
            raise AttributeError(f"Game has no field '{name}'")
        setattr(game, name, value)
    game.touch()
    return game

# ==============================================================================
# PLAYER SETTERS
# ==============================================================================

def create_player(session, game_id: int, name: str, color: str, index: int) -> Player:
    """Create a new active player."""
    player = Player(
        game_id=game_id,
        name=name,
        color=color,
        index=index,
        is_active=True
    )
    session.add(player)
    session.flush()
    logger.info(f"Created player '{name}' in game {game_id} at index {index}")
    return player

def deactivate_player(player: Player):
    """Soft-delete a player; the row stays for historical references."""
    player.is_active = False
    logger.info(f"Deactivated player '{player.name}' in game {player.game_id}")

def renumber_players(players: List[Player]) -> int:
    """
    Assign indices 0..n-1 to players in their current index order.

    Returns:
        Number of players whose index changed
    """
    changed = 0
    for position, player in enumerate(sorted(players, key=lambda p: (p.index, p.id))):
        if player.index != position:
            player.index = position
            changed += 1
    return changed

# ==============================================================================
# CATEGORY SETTERS
# ==============================================================================

def create_category(session, name: str, emoji: str, words: List[Dict[str, str]],
                    is_default: bool = False) -> Category:
    """Create a new category."""
    category = Category(name=name, emoji=emoji, words=words, is_default=is_default)
    session.add(category)
    session.flush()
    logger.info(f"Created category '{name}' with {len(words)} words")
    return category

def ensure_default_categories(session, defaults: Optional[List[Dict[str, Any]]] = None) -> int:
    """
    Seed the built-in categories that are missing. Safe to call repeatedly.

    Returns:
        Number of categories created
    """
    if defaults is None:
        from utils.constants import DEFAULT_CATEGORIES
        defaults = DEFAULT_CATEGORIES

    existing = {name for (name,) in session.query(Category.name).all()}
    created = 0
    for entry in defaults:
        if entry['name'] in existing:
            continue
        create_category(
            session,
            name=entry['name'],
            emoji=entry.get('emoji', ''),
            words=[dict(word=w['word'], hint=w['hint']) for w in entry['words']],
            is_default=True
        )
        created += 1
    return created
