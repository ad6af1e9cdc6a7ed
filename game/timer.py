"""
Timer Coordinator for Imposter Party.

The countdown is never a running task: remaining time is derived from the
phase's anchor timestamp, the configured duration and a caller-supplied "now".
Callers poll (about once per second) and ask whether the phase must advance.
"""

from datetime import datetime, timezone
from typing import Optional

from .models import GameStatus, GameSnapshot, TimerStatus

def as_utc(moment: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment

def remaining_seconds(anchor: datetime, duration: int, now: datetime) -> float:
    """remaining = max(0, duration - (now - anchor)), in seconds."""
    elapsed = (as_utc(now) - as_utc(anchor)).total_seconds()
    return max(0.0, duration - elapsed)

def is_expired(anchor: datetime, duration: int, now: datetime) -> bool:
    return remaining_seconds(anchor, duration, now) == 0

class TimerCoordinator:
    """Derives countdown state and decides when expiry forces progress."""

    def status(self, game: GameSnapshot, now: datetime) -> TimerStatus:
        """Countdown state of a game's current phase."""
        settings = game.settings
        if not settings.timer_enabled or game.timer_anchor is None:
            return TimerStatus(enabled=settings.timer_enabled, status=game.status,
                               duration=settings.timer_duration)

        remaining = remaining_seconds(game.timer_anchor, settings.timer_duration, now)
        return TimerStatus(
            enabled=True,
            status=game.status,
            remaining=remaining,
            expired=remaining == 0,
            duration=settings.timer_duration
        )

    def should_auto_advance(self, status: GameStatus, timer_enabled: bool,
                            anchor: Optional[datetime], duration: int, now: datetime) -> bool:
        """
        Whether an expired countdown forces the next turn.

        Only the playing phase is forced; an expired discussion countdown is
        advisory and voting stays an explicit action.
        """
        if status != GameStatus.PLAYING or not timer_enabled or anchor is None:
            return False
        return is_expired(anchor, duration, now)
