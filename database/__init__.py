"""
Database Package for Imposter Party.

Provides clean imports for all database functionality.
"""

# Models
from .models import (
    Base,
    Game,
    Player,
    Category
)

# Configuration and session management
from .config import (
    SessionLocal,
    configure_database,
    get_db_session,
    init_database,
    drop_database
)

# Import getter functions
from .getters import (
    get_game_by_id,
    get_game_by_code,
    is_game_code_taken,
    get_player_by_id,
    get_active_players,
    get_all_categories,
    get_categories_by_names
)

# Import setter functions
from .setters import (
    create_game,
    patch_game,
    create_player,
    deactivate_player,
    renumber_players,
    create_category,
    ensure_default_categories
)

__all__ = [
    # Models
    "Base",
    "Game",
    "Player",
    "Category",

    # Configuration
    "SessionLocal",
    "configure_database",
    "get_db_session",
    "init_database",
    "drop_database",

    # Getters
    "get_game_by_id",
    "get_game_by_code",
    "is_game_code_taken",
    "get_player_by_id",
    "get_active_players",
    "get_all_categories",
    "get_categories_by_names",

    # Setters
    "create_game",
    "patch_game",
    "create_player",
    "deactivate_player",
    "renumber_players",
    "create_category",
    "ensure_default_categories",
]
