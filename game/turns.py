"""
Turn Sequencer for Imposter Party.

Walks the card-viewing phase one player at a time and hands over
to the discussion phase after the last player.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from database import Game, patch_game
from .models import GameStatus

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class TurnStep:
    """Where the game is after one advance."""
    next_index: int
    status: GameStatus

    @property
    def entered_discussion(self) -> bool:
        return self.status == GameStatus.DISCUSSION

class TurnSequencer:
    """Moves the current player pointer forward through the roster."""

    @staticmethod
    def next_step(current_index: int, active_count: int) -> TurnStep:
        """
        Compute the next step without touching any state.

        Args:
            current_index: Index of the player who just viewed their card
            active_count: Number of active players
        """
        next_index = current_index + 1
        if next_index < active_count:
            return TurnStep(next_index=next_index, status=GameStatus.PLAYING)
        return TurnStep(next_index=current_index, status=GameStatus.DISCUSSION)

    def advance(self, game: Game, active_count: int, timer_enabled: bool, now: datetime) -> TurnStep:
        """
        Apply one advance to a game row that is in the playing phase.

        The discussion phase gets a fresh timer anchor when the timer is on.
        """
        step = self.next_step(game.current_player_index, active_count)

        if step.entered_discussion:
            patch_game(
                game,
                status=GameStatus.DISCUSSION.value,
                timer_anchor=now if timer_enabled else None
            )
            logger.info(f"Game {game.game_code}: all {active_count} players viewed their card, "
                        f"discussion started")
        else:
            patch_game(game, current_player_index=step.next_index)
            logger.info(f"Game {game.game_code}: turn passed to seat {step.next_index}")

        return step
