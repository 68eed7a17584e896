"""Database models for persisted practice progress."""
from sqlalchemy import Column, Integer, String, UniqueConstraint

from wordwatch.models.base import Base, TimestampMixin


class WordProgressEntry(Base, TimestampMixin):
    """Stored progress record of one word in one word list."""

    __tablename__ = "word_progress"
    __table_args__ = (UniqueConstraint("list_name", "word_id", name="uq_word_progress_list_word"),)

    id = Column(Integer, primary_key=True)
    list_name = Column(String, nullable=False, index=True)
    word_id = Column(String, nullable=False)
    familiar_count = Column(Integer, nullable=False, default=0)
    next_available_step = Column(Integer, nullable=False, default=0)  # timeline step, not list index


class PracticePosition(Base, TimestampMixin):
    """Where a practice session over a word list stopped."""

    __tablename__ = "practice_positions"

    id = Column(Integer, primary_key=True)
    list_name = Column(String, unique=True, nullable=False)
    current_index = Column(Integer, nullable=False, default=0)
    current_step = Column(Integer, nullable=False, default=0)
