"""
Data models for game management.

Immutable snapshots handed out by the engine after every operation,
plus the settings, tally and outcome structures.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Optional, Dict, Any, Mapping, Tuple
from datetime import datetime
from enum import Enum

from utils.constants import DEFAULT_SETTINGS, THEMES
from utils.helpers import format_countdown
from .errors import InvalidSettings

class GameStatus(Enum):
    """Game status enumeration."""
    LOBBY = "lobby"
    PLAYING = "playing"
    DISCUSSION = "discussion"
    RESULTS = "results"
    ENDED = "ended"

class OutcomeBand(Enum):
    """How the vote went for the group."""
    FULL_SUCCESS = "full_success"
    PARTIAL_SUCCESS = "partial_success"
    IMPOSTER_VICTORY = "imposter_victory"

@dataclass(frozen=True)
class GameSettings:
    """Per-game configuration."""
    theme: str = DEFAULT_SETTINGS['theme']
    language: str = DEFAULT_SETTINGS['language']
    troll_mode: bool = DEFAULT_SETTINGS['troll_mode']  # stored, not used by any transition
    timer_enabled: bool = DEFAULT_SETTINGS['timer_enabled']
    timer_duration: int = DEFAULT_SETTINGS['timer_duration']
    number_of_imposters: int = DEFAULT_SETTINGS['number_of_imposters']
    words_per_round: int = DEFAULT_SETTINGS['words_per_round']

    def __post_init__(self):
        if self.theme not in THEMES:
            raise InvalidSettings(f"Theme must be one of {', '.join(THEMES)}", {'field': 'theme'})
        if not isinstance(self.language, str) or not self.language:
            raise InvalidSettings("Language must be a non-empty string", {'field': 'language'})
        for name in ('troll_mode', 'timer_enabled'):
            if not isinstance(getattr(self, name), bool):
                raise InvalidSettings(f"{name} must be a boolean", {'field': name})
        for name in ('timer_duration', 'number_of_imposters', 'words_per_round'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidSettings(f"{name} must be a positive integer", {'field': name})

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'GameSettings':
        """Build settings from a dictionary; missing keys take the defaults."""
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise InvalidSettings("Settings must be an object", {'field': 'settings'})
        data = dict(data)
        unknown = set(data) - set(cls.__dataclass_fields__)
        if unknown:
            raise InvalidSettings(f"Unknown settings: {', '.join(sorted(unknown))}",
                                  {'unknown': sorted(unknown)})
        return cls(**data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

@dataclass(frozen=True)
class PlayerData:
    """A player as seen by callers."""
    id: int
    game_id: int
    name: str
    color: str
    index: int
    is_active: bool = True

    @classmethod
    def from_model(cls, player) -> 'PlayerData':
        return cls(
            id=player.id,
            game_id=player.game_id,
            name=player.name,
            color=player.color,
            index=player.index,
            is_active=player.is_active
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return asdict(self)

@dataclass(frozen=True)
class GameSnapshot:
    """Immutable view of a game and its roster after a committed operation."""
    id: int
    game_code: str
    status: GameStatus
    current_player_index: int
    current_round: int
    total_rounds: int
    selected_categories: Tuple[str, ...]
    settings: GameSettings
    players: Tuple[PlayerData, ...] = ()
    secret_word: Optional[str] = None
    hint_word: Optional[str] = None
    imposter_indices: Tuple[int, ...] = ()
    timer_anchor: Optional[datetime] = None
    votes: Optional[Dict[int, int]] = None

    @classmethod
    def from_model(cls, game, players) -> 'GameSnapshot':
        votes = None
        if game.votes is not None:
            votes = {int(voter): int(accused) for voter, accused in game.votes.items()}
        return cls(
            id=game.id,
            game_code=game.game_code,
            status=GameStatus(game.status),
            current_player_index=game.current_player_index,
            current_round=game.current_round,
            total_rounds=game.total_rounds,
            selected_categories=tuple(game.selected_categories or ()),
            settings=GameSettings.from_dict(game.settings),
            players=tuple(PlayerData.from_model(p) for p in players),
            secret_word=game.secret_word,
            hint_word=game.hint_word,
            imposter_indices=tuple(sorted(game.imposter_indices or ())),
            timer_anchor=game.timer_anchor,
            votes=votes
        )

    @property
    def active_count(self) -> int:
        return len(self.players)

    @property
    def current_player(self) -> Optional[PlayerData]:
        """Player whose turn it is to view their card."""
        if self.status != GameStatus.PLAYING:
            return None
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    def is_imposter(self, index: int) -> bool:
        return index in self.imposter_indices

    def to_dict(self, include_secrets: bool = False) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            include_secrets: Whether to include the word, hint and imposter roles
        """
        data = {
            'id': self.id,
            'game_code': self.game_code,
            'status': self.status.value,
            'current_player_index': self.current_player_index,
            'current_round': self.current_round,
            'total_rounds': self.total_rounds,
            'selected_categories': list(self.selected_categories),
            'settings': self.settings.to_dict(),
            'players': [player.to_dict() for player in self.players],
            'timer_anchor': self.timer_anchor.isoformat() if self.timer_anchor else None,
            'votes': {str(voter): accused for voter, accused in self.votes.items()}
                     if self.votes is not None else None,
            'has_secret_word': self.secret_word is not None
        }

        # Roles stay hidden until results unless explicitly requested
        if include_secrets or self.status == GameStatus.RESULTS:
            data.update({
                'secret_word': self.secret_word,
                'hint_word': self.hint_word,
                'imposter_indices': list(self.imposter_indices)
            })

        return data

@dataclass(frozen=True)
class CardView:
    """What the current player sees when they flip their card."""
    player: PlayerData
    is_imposter: bool
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player': self.player.to_dict(),
            'is_imposter': self.is_imposter,
            'text': self.text
        }

@dataclass(frozen=True)
class TallyEntry:
    """Votes received by one roster seat."""
    player: PlayerData
    vote_count: int
    is_imposter: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'player': self.player.to_dict(),
            'vote_count': self.vote_count,
            'is_imposter': self.is_imposter
        }

@dataclass(frozen=True)
class Outcome:
    """Judgement of a finished vote."""
    success: bool
    accused_is_imposter: bool
    all_imposters_caught: bool
    band: OutcomeBand
    top_accused: Optional[PlayerData] = None
    imposters_with_votes: int = 0
    total_imposters: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'success': self.success,
            'accused_is_imposter': self.accused_is_imposter,
            'all_imposters_caught': self.all_imposters_caught,
            'band': self.band.value,
            'top_accused': self.top_accused.to_dict() if self.top_accused else None,
            'imposters_with_votes': self.imposters_with_votes,
            'total_imposters': self.total_imposters
        }

@dataclass(frozen=True)
class ResultsReport:
    """Everything the results screen shows."""
    game: GameSnapshot
    tally: List[TallyEntry] = field(default_factory=list)
    outcome: Optional[Outcome] = None
    message: str = ""

    @property
    def imposters(self) -> List[PlayerData]:
        return [p for p in self.game.players if self.game.is_imposter(p.index)]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'game_id': self.game.id,
            'secret_word': self.game.secret_word,
            'hint_word': self.game.hint_word,
            'tally': [entry.to_dict() for entry in self.tally],
            'outcome': self.outcome.to_dict() if self.outcome else None,
            'message': self.message,
            'imposters': [player.to_dict() for player in self.imposters]
        }

@dataclass(frozen=True)
class TimerStatus:
    """Countdown state of the current phase."""
    enabled: bool
    status: GameStatus
    remaining: Optional[float] = None
    expired: bool = False
    duration: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'enabled': self.enabled,
            'status': self.status.value,
            'remaining': self.remaining,
            'display': format_countdown(self.remaining),
            'expired': self.expired,
            'duration': self.duration
        }
