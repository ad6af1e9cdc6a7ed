"""
Error kinds raised by the game engine.

Every guard violation raises one of these; none are retried by the engine.
"""

from typing import Any, Dict, Iterable, List, Optional


class GameError(Exception):
    """Base class for engine errors."""

    code = 'game_error'

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            'error': self.code,
            'message': self.message,
            'details': self.details
        }


class NotFound(GameError):
    """A game or player does not exist, or the player is inactive."""

    code = 'not_found'


class InvalidStartConditions(GameError):
    """One or more start preconditions failed."""

    code = 'invalid_start_conditions'

    def __init__(self, violations: List[str]):
        self.violations = list(violations)
        super().__init__(
            "Cannot start game: " + "; ".join(self.violations),
            {'violations': self.violations}
        )


class InvalidTransition(GameError):
    """The operation is not allowed in the game's current status."""

    code = 'invalid_transition'

    def __init__(self, operation: str, status: str, allowed: Iterable[str] = ()):
        self.operation = operation
        self.status = status
        self.allowed = list(allowed)
        message = f"Cannot {operation} while game is {status}"
        if self.allowed:
            message += f" (allowed: {', '.join(self.allowed)})"
        super().__init__(message, {
            'operation': operation,
            'status': status,
            'allowed': self.allowed
        })


class IncompleteVoteSet(GameError):
    """Submitted voters differ from the active roster."""

    code = 'incomplete_vote_set'

    def __init__(self, missing: Iterable[int], unexpected: Iterable[Any] = ()):
        self.missing = sorted(missing)
        self.unexpected = sorted(str(voter) for voter in unexpected)
        parts = []
        if self.missing:
            parts.append(f"missing votes from players {self.missing}")
        if self.unexpected:
            parts.append(f"votes from unknown players {self.unexpected}")
        super().__init__(
            "Vote set rejected: " + "; ".join(parts),
            {'missing': self.missing, 'unexpected': self.unexpected}
        )


class InvalidVote(GameError):
    """A vote names an accused index outside the roster."""

    code = 'invalid_vote'


class InvalidSettings(GameError):
    """Game settings failed validation."""

    code = 'invalid_settings'


class InvalidPlayerData(GameError):
    """A player name or color failed validation."""

    code = 'invalid_player_data'


class InvalidGameCode(GameError):
    """A requested game code is malformed."""

    code = 'invalid_game_code'


class GameCodeTaken(InvalidGameCode):
    """A requested game code belongs to another game."""

    code = 'game_code_taken'
