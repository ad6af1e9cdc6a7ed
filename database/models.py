"""
Database Models for Imposter Party.

Contains all SQLAlchemy model definitions for the game.
Pure data models with no business logic.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, DateTime, JSON, Index
from sqlalchemy.orm import relationship, declarative_base

# Create the base class for models
Base = declarative_base()

class Game(Base):
    """Represents one match played around a table."""

    __tablename__ = 'games'

    id = Column(Integer, primary_key=True)
    game_code = Column(String(12), unique=True, nullable=False, index=True)

    # Lifecycle
    status = Column(String(20), nullable=False, default='lobby')  # lobby, playing, discussion, results, ended
    current_player_index = Column(Integer, nullable=False, default=0)
    current_round = Column(Integer, nullable=False, default=1)
    total_rounds = Column(Integer, nullable=False, default=1)

    # Round configuration and secrets
    selected_categories = Column(JSON, nullable=False, default=list)
    secret_word = Column(String(100), nullable=True)
    hint_word = Column(String(100), nullable=True)
    imposter_indices = Column(JSON, nullable=False, default=list)
    settings = Column(JSON, nullable=False)

    # Timer and voting
    timer_anchor = Column(DateTime(timezone=True), nullable=True)
    votes = Column(JSON, nullable=True)  # str(voter player id) -> accused roster index

    # Timestamps
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # Relationships
    players = relationship('Player', back_populates='game', cascade='all, delete-orphan',
                           order_by='Player.index')

    def __repr__(self):
        return f"<Game(code='{self.game_code}', status='{self.status}')>"

    def touch(self):
        """Update the last modification timestamp."""
        self.updated_at = datetime.now(timezone.utc)

class Player(Base):
    """Represents a seat at the table. Removed players are kept as inactive rows."""

    __tablename__ = 'players'

    id = Column(Integer, primary_key=True)
    name = Column(String(50), nullable=False)
    color = Column(String(20), nullable=False)
    index = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    # Timestamps
    joined_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    # Foreign key
    game_id = Column(Integer, ForeignKey('games.id'), nullable=False)

    # Relationships
    game = relationship('Game', back_populates='players')

    # Indexes
    __table_args__ = (
        Index('idx_player_game_active_index', 'game_id', 'is_active', 'index'),
    )

    def __repr__(self):
        return f"<Player(name='{self.name}', index={self.index}, active={self.is_active})>"

class Category(Base):
    """A named word list. Read-only while games are running."""

    __tablename__ = 'categories'

    id = Column(Integer, primary_key=True)
    name = Column(String(100), unique=True, nullable=False, index=True)
    emoji = Column(String(16), nullable=False, default='')
    words = Column(JSON, nullable=False, default=list)  # [{'word': ..., 'hint': ...}]
    is_default = Column(Boolean, nullable=False, default=False)

    def __repr__(self):
        return f"<Category(name='{self.name}', words={len(self.words or [])})>"
