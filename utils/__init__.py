"""
Utilities module for Imposter Party.

This module contains constants and helper functions
used throughout the application.
"""

from .constants import (
    PLAYER_COLORS, DEFAULT_SETTINGS, GAME_CONFIG,
    DEFAULT_CATEGORIES, OUTCOME_MESSAGES
)
from .helpers import (
    generate_game_code, default_player_name, color_for_position,
    validate_player_name, format_countdown
)

__all__ = [
    'PLAYER_COLORS',
    'DEFAULT_SETTINGS',
    'GAME_CONFIG',
    'DEFAULT_CATEGORIES',
    'OUTCOME_MESSAGES',
    'generate_game_code',
    'default_player_name',
    'color_for_position',
    'validate_player_name',
    'format_countdown'
]
