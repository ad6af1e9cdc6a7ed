"""
Game Manager - lifecycle state machine for Imposter Party.

Entry point for every external command. Each command runs as one database
transaction with the game row locked, delegates to the roster, round setup,
turn, timer and vote components, and publishes the resulting snapshot to
every registered listener once committed.
"""

import random
import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from database import (
    get_db_session, get_game_by_id, get_game_by_code as db_get_game_by_code,
    is_game_code_taken, get_all_categories, get_categories_by_names,
    create_game as db_create_game, patch_game, ensure_default_categories
)
from utils.constants import DEFAULT_PLAYER_COUNT
from utils.helpers import generate_game_code, default_player_name, color_for_position
from .errors import NotFound, InvalidTransition, InvalidGameCode, GameCodeTaken, InvalidSettings
from .models import (
    GameStatus, GameSettings, GameSnapshot, PlayerData, CardView,
    ResultsReport, TimerStatus
)
from .roster import RosterManager
from .round_setup import RoundSetup
from .turns import TurnSequencer
from .timer import TimerCoordinator
from .voting import VoteManager

logger = logging.getLogger(__name__)

Listener = Callable[[GameSnapshot], None]

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

class GameManager:
    """Coordinates all game operations."""

    def __init__(self, rng: Optional[random.Random] = None,
                 clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize the game manager.

        Args:
            rng: Random source for codes, words and roles
            clock: Returns the current UTC time; used for timer anchors
        """
        self.rng = rng or random.Random()
        self.clock = clock or utc_now
        self.roster = RosterManager()
        self.round_setup = RoundSetup(self.rng)
        self.turns = TurnSequencer()
        self.timer = TimerCoordinator()
        self.vote_manager = VoteManager()
        self._listeners: List[Listener] = []
        self._game_locks: Dict[int, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    # ==========================================================================
    # OBSERVERS
    # ==========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with every committed snapshot.

        Returns:
            A callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, snapshot: GameSnapshot):
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Snapshot listener failed for game {snapshot.id}: {e}")

    # ==========================================================================
    # TRANSACTIONS
    # ==========================================================================

    def _game_lock(self, game_id: int) -> threading.Lock:
        with self._locks_guard:
            return self._game_locks.setdefault(game_id, threading.Lock())

    @contextmanager
    def _locked_game(self, game_id: int):
        """
        Open a transaction holding the game row lock.

        Commands on the same game served by this process also wait on a
        per-game lock, so they never interleave even where the database
        has no row locks.
        """
        with self._game_lock(game_id):
            with get_db_session() as session:
                game = get_game_by_id(session, game_id, for_update=True)
                if not game:
                    raise NotFound(f"Game {game_id} not found", {'game_id': game_id})
                yield session, game

    def _snapshot(self, session, game) -> GameSnapshot:
        session.flush()
        return GameSnapshot.from_model(game, self.roster.list_active(session, game.id))

    @staticmethod
    def _require_status(game, operation: str, *allowed: GameStatus):
        status = GameStatus(game.status)
        if status not in allowed:
            raise InvalidTransition(operation, status.value, [s.value for s in allowed])

    # ==========================================================================
    # GAMES
    # ==========================================================================

    def create_game(self, settings: Union[GameSettings, Mapping[str, Any], None] = None,
                    game_code: Optional[str] = None,
                    with_default_players: bool = False) -> GameSnapshot:
        """
        Create a game in the lobby.

        Args:
            settings: Game settings; defaults apply to anything omitted
            game_code: Join code to use; generated when omitted
            with_default_players: Seat "Player 1".."Player 3" right away
        """
        if not isinstance(settings, GameSettings):
            settings = GameSettings.from_dict(settings)

        with get_db_session() as session:
            code = self._claim_game_code(session, game_code)
            game = db_create_game(session, code, settings.to_dict(), settings.words_per_round)

            if with_default_players:
                for position in range(DEFAULT_PLAYER_COUNT):
                    self.roster.add_player(session, game.id, default_player_name(position),
                                           color_for_position(position))

            snapshot = self._snapshot(session, game)

        logger.info(f"Game {snapshot.game_code} created (id {snapshot.id})")
        self._publish(snapshot)
        return snapshot

    def _claim_game_code(self, session, game_code: Optional[str]) -> str:
        if game_code is not None:
            if not isinstance(game_code, str) or not game_code.strip().isalnum():
                raise InvalidGameCode(f"Game code {game_code!r} must be alphanumeric text",
                                      {'game_code': game_code})
            code = game_code.strip().upper()
            if is_game_code_taken(session, code):
                raise GameCodeTaken(f"Game code '{code}' is already in use", {'game_code': code})
            return code

        while True:
            code = generate_game_code(rng=self.rng)
            if not is_game_code_taken(session, code):
                return code

    def get_game(self, game_id: int) -> GameSnapshot:
        """Current snapshot of a game."""
        with get_db_session() as session:
            game = get_game_by_id(session, game_id)
            if not game:
                raise NotFound(f"Game {game_id} not found", {'game_id': game_id})
            return self._snapshot(session, game)

    def get_game_by_code(self, game_code: str) -> GameSnapshot:
        """Look a game up by its join code."""
        with get_db_session() as session:
            game = db_get_game_by_code(session, game_code)
            if not game:
                raise NotFound(f"Game with code '{game_code}' not found", {'game_code': game_code})
            return self._snapshot(session, game)

    def update_settings(self, game_id: int,
                        settings: Union[GameSettings, Mapping[str, Any]]) -> GameSnapshot:
        """Replace a game's settings; total_rounds follows words_per_round."""
        if not isinstance(settings, GameSettings):
            settings = GameSettings.from_dict(settings)

        with self._locked_game(game_id) as (session, game):
            patch_game(game, settings=settings.to_dict(), total_rounds=settings.words_per_round)
            snapshot = self._snapshot(session, game)

        logger.info(f"Game {snapshot.game_code}: settings updated")
        self._publish(snapshot)
        return snapshot

    def update_selected_categories(self, game_id: int, categories: Iterable[str]) -> GameSnapshot:
        """Choose the word categories for the next round."""
        if isinstance(categories, (str, Mapping)) or not isinstance(categories, Iterable):
            raise InvalidSettings("Categories must be a list of category names",
                                  {'field': 'categories'})
        categories = list(categories)
        if not all(isinstance(name, str) for name in categories):
            raise InvalidSettings("Category names must be text", {'field': 'categories'})
        names = list(dict.fromkeys(name for name in categories if name))

        with self._locked_game(game_id) as (session, game):
            self._require_status(game, 'select categories', GameStatus.LOBBY)
            patch_game(game, selected_categories=names)
            snapshot = self._snapshot(session, game)

        logger.info(f"Game {snapshot.game_code}: categories set to {names}")
        self._publish(snapshot)
        return snapshot

    # ==========================================================================
    # ROSTER
    # ==========================================================================

    def list_players(self, game_id: int) -> List[PlayerData]:
        """Active players ordered by seat."""
        return list(self.get_game(game_id).players)

    def add_player(self, game_id: int, name: Optional[str] = None,
                   color: Optional[str] = None) -> PlayerData:
        """Seat a new player at the end of the roster. Lobby only."""
        with self._locked_game(game_id) as (session, game):
            self._require_status(game, 'add a player', GameStatus.LOBBY)
            position = len(self.roster.list_active(session, game_id))
            player = self.roster.add_player(
                session, game_id,
                name if name is not None else default_player_name(position),
                color if color is not None else color_for_position(position)
            )
            player_data = PlayerData.from_model(player)
            snapshot = self._snapshot(session, game)

        self._publish(snapshot)
        return player_data

    def update_player(self, player_id: int, name: Optional[str] = None,
                      color: Optional[str] = None) -> PlayerData:
        """Rename or recolor a player. Allowed in every phase."""
        game_id = self._game_id_for_player(player_id)
        with self._locked_game(game_id) as (session, game):
            player = self.roster.update_player(session, player_id, name=name, color=color)
            player_data = PlayerData.from_model(player)
            snapshot = self._snapshot(session, game)

        self._publish(snapshot)
        return player_data

    def remove_player(self, player_id: int) -> GameSnapshot:
        """Remove a player and compact the roster. Lobby only."""
        game_id = self._game_id_for_player(player_id)
        with self._locked_game(game_id) as (session, game):
            self._require_status(game, 'remove a player', GameStatus.LOBBY)
            self.roster.remove_player(session, player_id)
            snapshot = self._snapshot(session, game)

        self._publish(snapshot)
        return snapshot

    def _game_id_for_player(self, player_id: int) -> int:
        with get_db_session() as session:
            return self.roster.get_active_player(session, player_id).game_id

    # ==========================================================================
    # ROUND
    # ==========================================================================

    def start_game(self, game_id: int) -> GameSnapshot:
        """Leave the lobby: pick the word, assign imposters, seat 0 goes first."""
        with self._locked_game(game_id) as (session, game):
            self._require_status(game, 'start the game', GameStatus.LOBBY)
            settings = GameSettings.from_dict(game.settings)
            active_count = len(self.roster.list_active(session, game_id))
            categories = get_categories_by_names(session, game.selected_categories or [])

            assignment = self.round_setup.prepare(
                active_count=active_count,
                selected_categories=game.selected_categories or [],
                categories=categories,
                number_of_imposters=settings.number_of_imposters
            )

            patch_game(
                game,
                status=GameStatus.PLAYING.value,
                current_player_index=0,
                secret_word=assignment.secret_word,
                hint_word=assignment.hint_word,
                imposter_indices=list(assignment.imposter_indices),
                timer_anchor=self.clock() if settings.timer_enabled else None,
                votes=None
            )
            snapshot = self._snapshot(session, game)

        logger.info(f"Game {snapshot.game_code} started with {snapshot.active_count} players "
                    f"and {len(snapshot.imposter_indices)} imposter(s)")
        self._publish(snapshot)
        return snapshot

    def current_card(self, game_id: int) -> CardView:
        """The card shown to the player whose turn it is."""
        snapshot = self.get_game(game_id)
        if snapshot.status != GameStatus.PLAYING:
            raise InvalidTransition('view a card', snapshot.status.value, [GameStatus.PLAYING.value])

        player = snapshot.current_player
        if player is None:
            raise NotFound(f"No player at seat {snapshot.current_player_index}",
                           {'index': snapshot.current_player_index})

        is_imposter = snapshot.is_imposter(player.index)
        return CardView(
            player=player,
            is_imposter=is_imposter,
            text=snapshot.hint_word if is_imposter else snapshot.secret_word
        )

    def advance_turn(self, game_id: int) -> GameSnapshot:
        """The current player is done; pass the phone on."""
        with self._locked_game(game_id) as (session, game):
            self._require_status(game, 'advance the turn', GameStatus.PLAYING)
            self._advance(session, game)
            snapshot = self._snapshot(session, game)

        self._publish(snapshot)
        return snapshot

    def _advance(self, session, game):
        settings = GameSettings.from_dict(game.settings)
        active_count = len(self.roster.list_active(session, game.id))
        return self.turns.advance(game, active_count, settings.timer_enabled, self.clock())

    # ==========================================================================
    # TIMER
    # ==========================================================================

    def timer_status(self, game_id: int) -> TimerStatus:
        """Countdown state of the current phase."""
        return self.timer.status(self.get_game(game_id), self.clock())

    def tick(self, game_id: int) -> Tuple[GameSnapshot, TimerStatus]:
        """
        Re-evaluate the countdown; meant to be polled by clients.

        An expired countdown while playing advances one turn. An expired
        discussion countdown changes nothing.
        """
        now = self.clock()
        advanced = False
        with self._locked_game(game_id) as (session, game):
            settings = GameSettings.from_dict(game.settings)
            if self.timer.should_auto_advance(GameStatus(game.status), settings.timer_enabled,
                                              game.timer_anchor, settings.timer_duration, now):
                logger.info(f"Game {game.game_code}: viewing time is up, advancing turn")
                self._advance(session, game)
                advanced = True
            snapshot = self._snapshot(session, game)

        if advanced:
            self._publish(snapshot)
        return snapshot, self.timer.status(snapshot, now)

    # ==========================================================================
    # VOTING
    # ==========================================================================

    def submit_votes(self, game_id: int, votes: Mapping) -> GameSnapshot:
        """
        Record every player's vote at once and reveal the results.

        Accepted in any phase once a round has been dealt; a later
        submission replaces the stored votes.

        Args:
            game_id: Game being voted on
            votes: voter player id -> accused roster index, one entry per active player
        """
        with self._locked_game(game_id) as (session, game):
            if game.secret_word is None:
                raise InvalidTransition('submit votes', game.status)
            players = self.roster.list_active(session, game_id)
            normalized = self.vote_manager.validate_submission(votes, players)

            patch_game(
                game,
                status=GameStatus.RESULTS.value,
                votes={str(voter): accused for voter, accused in normalized.items()}
            )
            snapshot = self._snapshot(session, game)

        logger.info(f"Game {snapshot.game_code}: {len(normalized)} votes submitted")
        self._publish(snapshot)
        return snapshot

    def get_results(self, game_id: int) -> ResultsReport:
        """Tally and judge the stored votes."""
        snapshot = self.get_game(game_id)
        if snapshot.votes is None:
            raise InvalidTransition('show results', snapshot.status.value)

        tally = self.vote_manager.tally(snapshot.players, snapshot.votes, snapshot.imposter_indices)
        outcome = self.vote_manager.judge_outcome(tally, snapshot.imposter_indices)
        return ResultsReport(
            game=snapshot,
            tally=tally,
            outcome=outcome,
            message=self.vote_manager.outcome_message(outcome)
        )

    # ==========================================================================
    # END / RESET
    # ==========================================================================

    def end_game(self, game_id: int) -> GameSnapshot:
        """Stop the game from any phase."""
        with self._locked_game(game_id) as (session, game):
            patch_game(game, status=GameStatus.ENDED.value)
            snapshot = self._snapshot(session, game)

        logger.info(f"Game {snapshot.game_code} ended")
        self._publish(snapshot)
        return snapshot

    def reset(self, game_id: int) -> GameSnapshot:
        """Back to the lobby, keeping roster, settings and game code."""
        with self._locked_game(game_id) as (session, game):
            self._require_status(game, 'reset the game', GameStatus.RESULTS, GameStatus.ENDED)
            patch_game(
                game,
                status=GameStatus.LOBBY.value,
                current_player_index=0,
                current_round=1,
                secret_word=None,
                hint_word=None,
                imposter_indices=[],
                timer_anchor=None,
                votes=None
            )
            snapshot = self._snapshot(session, game)

        logger.info(f"Game {snapshot.game_code} reset to lobby")
        self._publish(snapshot)
        return snapshot

    # ==========================================================================
    # CATALOG
    # ==========================================================================

    def ensure_default_categories(self) -> int:
        """Seed the built-in categories; returns how many were created."""
        with get_db_session() as session:
            return ensure_default_categories(session)

    def list_categories(self) -> List[Dict[str, Any]]:
        """Every category in the catalog."""
        with get_db_session() as session:
            return [self._category_dict(c) for c in get_all_categories(session)]

    def get_categories(self, names: Iterable[str]) -> List[Dict[str, Any]]:
        """Catalog entries for the given names; unknown names are skipped."""
        with get_db_session() as session:
            return [self._category_dict(c) for c in get_categories_by_names(session, list(names))]

    @staticmethod
    def _category_dict(category) -> Dict[str, Any]:
        return {
            'name': category.name,
            'emoji': category.emoji,
            'word_count': len(category.words or []),
            'words': list(category.words or []),
            'is_default': category.is_default
        }
