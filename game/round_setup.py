"""
Round Setup for Imposter Party.

Picks the secret word and assigns the imposter roles when a game leaves the lobby.
Randomness comes from an injected random.Random so rounds can be replayed in tests.
"""

import random
import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Sequence

from utils.constants import GAME_CONFIG
from .errors import InvalidStartConditions

logger = logging.getLogger(__name__)

NOT_ENOUGH_PLAYERS = "Need at least {minimum} players to start (have {count})"
NO_CATEGORIES = "Select at least one category"
EMPTY_WORD_POOL = "No words found in selected categories"

@dataclass(frozen=True)
class RoundAssignment:
    """Secret word and roles for one round."""
    secret_word: str
    hint_word: str
    imposter_indices: Tuple[int, ...]

class RoundSetup:
    """
    Prepares a round: validates start conditions, draws a word, assigns imposters.
    """

    def __init__(self, rng: Optional[random.Random] = None,
                 min_players: int = GAME_CONFIG['MIN_PLAYERS']):
        """
        Initialize round setup.

        Args:
            rng: Random source; a fresh unseeded one when omitted
            min_players: Fewest active players a game can start with
        """
        self.rng = rng or random.Random()
        self.min_players = min_players

    def check_start_conditions(self, active_count: int, selected_categories: Sequence[str],
                               word_pool: Sequence[dict]) -> List[str]:
        """Return every violated start precondition, empty when the game can start."""
        violations = []
        if active_count < self.min_players:
            violations.append(NOT_ENOUGH_PLAYERS.format(minimum=self.min_players, count=active_count))
        if not selected_categories:
            violations.append(NO_CATEGORIES)
        elif not word_pool:
            violations.append(EMPTY_WORD_POOL)
        return violations

    @staticmethod
    def build_word_pool(categories) -> List[dict]:
        """Concatenate the (word, hint) pairs of the given catalog categories."""
        pool = []
        for category in categories:
            pool.extend(category.words or [])
        return pool

    @staticmethod
    def imposter_count(number_of_imposters: int, active_count: int) -> int:
        """Desired imposters, clamped so at least one honest player remains."""
        return max(0, min(number_of_imposters, active_count - 1))

    def draw_word(self, word_pool: Sequence[dict]) -> Tuple[str, str]:
        """Pick one (word, hint) pair uniformly."""
        entry = word_pool[self.rng.randrange(len(word_pool))]
        return entry['word'], entry['hint']

    def draw_imposter_indices(self, count: int, active_count: int) -> Tuple[int, ...]:
        """Draw `count` distinct roster indices from [0, active_count)."""
        if count > active_count:
            raise ValueError(f"Cannot pick {count} imposters from {active_count} players")

        chosen = []
        while len(chosen) < count:
            candidate = self.rng.randrange(active_count)
            if candidate not in chosen:
                chosen.append(candidate)
        return tuple(chosen)

    def prepare(self, active_count: int, selected_categories: Sequence[str], categories,
                number_of_imposters: int) -> RoundAssignment:
        """
        Validate the start conditions and produce the round assignment.

        Args:
            active_count: Number of active players
            selected_categories: Category names chosen for the game
            categories: Catalog categories matching the selected names
            number_of_imposters: Configured imposter count before clamping

        Raises:
            InvalidStartConditions: listing every failed precondition
        """
        word_pool = self.build_word_pool(categories)
        violations = self.check_start_conditions(active_count, selected_categories, word_pool)
        if violations:
            raise InvalidStartConditions(violations)

        secret_word, hint_word = self.draw_word(word_pool)
        count = self.imposter_count(number_of_imposters, active_count)
        imposters = self.draw_imposter_indices(count, active_count)

        logger.debug(f"Round prepared from a pool of {len(word_pool)} words, "
                     f"{count} imposter(s) among {active_count} players")
        return RoundAssignment(
            secret_word=secret_word,
            hint_word=hint_word,
            imposter_indices=imposters
        )
