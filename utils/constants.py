"""
Game constants for Imposter Party.

This module contains all constant values used throughout the game,
including the built-in word categories, player colors and default settings.
"""

# Player colors handed out in seat order
PLAYER_COLORS = [
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7",
    "#DDA0DD", "#98D8C8", "#F7DC6F", "#BB8FCE", "#85C1E9"
]

DEFAULT_PLAYER_NAME = "Player {number}"
DEFAULT_PLAYER_COUNT = 3

THEMES = ('light', 'dark')

# Settings a new game starts with
DEFAULT_SETTINGS = {
    'theme': 'light',
    'language': 'NL',
    'troll_mode': False,
    'timer_enabled': True,
    'timer_duration': 300,  # seconds
    'number_of_imposters': 1,
    'words_per_round': 10
}

# Game configuration
GAME_CONFIG = {
    'MIN_PLAYERS': 3,
    'GAME_CODE_LENGTH': 6,
    'MAX_NAME_LENGTH': 50
}

# Outcome messages shown on the results screen
OUTCOME_MESSAGES = {
    'full_success': 'Congratulations! You found all the imposters!',
    'partial_success': 'Well done! You found an imposter, but there are more...',
    'imposter_victory': 'The imposters win! You picked the wrong person.'
}

# Built-in word lists seeded into the catalog
DEFAULT_CATEGORIES = [
    {
        'name': 'Animals',
        'emoji': '🐾',
        'words': [
            {'word': 'Elephant', 'hint': 'Large'},
            {'word': 'Penguin', 'hint': 'Cold'},
            {'word': 'Giraffe', 'hint': 'Tall'},
            {'word': 'Dolphin', 'hint': 'Water'},
            {'word': 'Owl', 'hint': 'Night'},
            {'word': 'Kangaroo', 'hint': 'Jump'},
            {'word': 'Snail', 'hint': 'Slow'},
            {'word': 'Parrot', 'hint': 'Colorful'},
        ]
    },
    {
        'name': 'Food',
        'emoji': '🍕',
        'words': [
            {'word': 'Pizza', 'hint': 'Italy'},
            {'word': 'Sushi', 'hint': 'Rice'},
            {'word': 'Pancake', 'hint': 'Breakfast'},
            {'word': 'Chocolate', 'hint': 'Sweet'},
            {'word': 'Soup', 'hint': 'Spoon'},
            {'word': 'Popcorn', 'hint': 'Cinema'},
            {'word': 'Cheese', 'hint': 'Dairy'},
            {'word': 'Lemon', 'hint': 'Sour'},
        ]
    },
    {
        'name': 'Places',
        'emoji': '🗺️',
        'words': [
            {'word': 'Airport', 'hint': 'Travel'},
            {'word': 'Hospital', 'hint': 'Care'},
            {'word': 'Beach', 'hint': 'Sand'},
            {'word': 'Library', 'hint': 'Quiet'},
            {'word': 'Casino', 'hint': 'Luck'},
            {'word': 'Museum', 'hint': 'History'},
            {'word': 'Submarine', 'hint': 'Deep'},
            {'word': 'Zoo', 'hint': 'Cages'},
        ]
    },
    {
        'name': 'Sports',
        'emoji': '⚽',
        'words': [
            {'word': 'Football', 'hint': 'Team'},
            {'word': 'Tennis', 'hint': 'Net'},
            {'word': 'Swimming', 'hint': 'Pool'},
            {'word': 'Cycling', 'hint': 'Wheels'},
            {'word': 'Skiing', 'hint': 'Snow'},
            {'word': 'Boxing', 'hint': 'Gloves'},
            {'word': 'Golf', 'hint': 'Hole'},
        ]
    },
    {
        'name': 'Professions',
        'emoji': '👩‍🚒',
        'words': [
            {'word': 'Firefighter', 'hint': 'Hero'},
            {'word': 'Teacher', 'hint': 'School'},
            {'word': 'Pilot', 'hint': 'Sky'},
            {'word': 'Chef', 'hint': 'Kitchen'},
            {'word': 'Dentist', 'hint': 'Teeth'},
            {'word': 'Farmer', 'hint': 'Fields'},
            {'word': 'Magician', 'hint': 'Trick'},
        ]
    },
]
