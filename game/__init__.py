"""
Game Module for Imposter Party.

Contains the lifecycle state machine and the components it delegates to.
"""

from .errors import (
    GameError, NotFound, InvalidStartConditions, InvalidTransition,
    IncompleteVoteSet, InvalidVote, InvalidSettings, InvalidPlayerData, InvalidGameCode,
    GameCodeTaken
)
from .models import (
    GameStatus, OutcomeBand, GameSettings, PlayerData, GameSnapshot,
    CardView, TallyEntry, Outcome, ResultsReport, TimerStatus
)
from .roster import RosterManager
from .round_setup import RoundSetup, RoundAssignment
from .turns import TurnSequencer, TurnStep
from .timer import TimerCoordinator, remaining_seconds, is_expired
from .voting import VoteManager
from .manager import GameManager

__all__ = [
    # Errors
    'GameError',
    'NotFound',
    'InvalidStartConditions',
    'InvalidTransition',
    'IncompleteVoteSet',
    'InvalidVote',
    'InvalidSettings',
    'InvalidPlayerData',
    'InvalidGameCode',
    'GameCodeTaken',

    # Data models
    'GameStatus',
    'OutcomeBand',
    'GameSettings',
    'PlayerData',
    'GameSnapshot',
    'CardView',
    'TallyEntry',
    'Outcome',
    'ResultsReport',
    'TimerStatus',
    'RoundAssignment',
    'TurnStep',

    # Components
    'GameManager',
    'RosterManager',
    'RoundSetup',
    'TurnSequencer',
    'TimerCoordinator',
    'VoteManager',
    'remaining_seconds',
    'is_expired'
]
