"""
Helper utilities for Imposter Party.

This module contains utility functions used throughout the application
for validation, generation, and formatting.
"""

import random
import string
from typing import Optional
from .constants import PLAYER_COLORS, DEFAULT_PLAYER_NAME, GAME_CONFIG

def generate_game_code(length: int = GAME_CONFIG['GAME_CODE_LENGTH'],
                       rng: Optional[random.Random] = None) -> str:
    """Generate a random, human-shareable game code."""
    rng = rng or random.Random()
    characters = string.ascii_uppercase + string.digits
    return ''.join(rng.choices(characters, k=length))

def default_player_name(position: int) -> str:
    """Name used for the player at a 0-based seat position."""
    return DEFAULT_PLAYER_NAME.format(number=position + 1)

def color_for_position(position: int) -> str:
    """Palette color for a 0-based seat position, cycling when exhausted."""
    return PLAYER_COLORS[position % len(PLAYER_COLORS)]

def validate_player_name(name: str) -> tuple[bool, Optional[str]]:
    """
    Validate a player display name.

    Returns:
        tuple: (is_valid, error_message)
    """
    if not isinstance(name, str):
        return False, "Player name must be text"

    if not name.strip():
        return False, "Player name cannot be empty"

    if len(name.strip()) > GAME_CONFIG['MAX_NAME_LENGTH']:
        return False, f"Player name must be {GAME_CONFIG['MAX_NAME_LENGTH']} characters or less"

    return True, None

def format_countdown(seconds: Optional[float]) -> str:
    """
    Format remaining seconds as m:ss, the way the timer is shown on screen.

    Args:
        seconds: Remaining time in seconds; None renders as an empty string

    Returns:
        Formatted countdown string
    """
    if seconds is None:
        return ""
    seconds = max(0, int(seconds))
    minutes, remaining = divmod(seconds, 60)
    return f"{minutes}:{remaining:02d}"
