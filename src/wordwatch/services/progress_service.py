"""Service for persisting practice progress."""
import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy import and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wordwatch import monitoring
from wordwatch.models.models import PracticePosition, WordProgressEntry
from wordwatch.models.word_models import ProgressStore, WordProgress

logger = logging.getLogger(__name__)

# Older exports wrote the step under this name
LEGACY_STEP_KEY = "nextAvailableIndex"


def record_to_dict(record: WordProgress) -> Dict[str, int]:
    """Convert a progress record to its JSON form."""
    return {
        "familiarCount": record.familiar_count,
        "nextAvailableStep": record.next_available_step,
    }


def record_from_dict(data: Dict[str, Any]) -> WordProgress:
    """Build a progress record from its JSON form, defaulting missing fields."""
    step = data.get("nextAvailableStep", data.get(LEGACY_STEP_KEY, 0))
    return WordProgress(
        familiar_count=int(data.get("familiarCount", 0)),
        next_available_step=int(step),
    )


def store_to_dict(store: ProgressStore) -> Dict[str, Dict[str, int]]:
    """Convert a progress store to a JSON-friendly mapping."""
    return {word_id: record_to_dict(record) for word_id, record in store.items()}


def store_from_dict(data: Dict[str, Dict[str, Any]]) -> ProgressStore:
    """Build a progress store from a JSON-friendly mapping."""
    return {word_id: record_from_dict(item) for word_id, item in data.items()}


class ProgressService:
    """Service for saving and loading progress stores per word list."""

    def __init__(self, db: Session):
        """Initialize the service with a database session."""
        self.db = db

    def _commit(self, operation: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Error during {operation}: {e}")
            monitoring.error_count.labels(error_type=f"db_{operation}").inc()
            raise

    def _get_entry(self, list_name: str, word_id: str) -> Optional[WordProgressEntry]:
        return (
            self.db.query(WordProgressEntry)
            .filter(
                and_(
                    WordProgressEntry.list_name == list_name,
                    WordProgressEntry.word_id == word_id,
                )
            )
            .first()
        )

    def load_store(self, list_name: str) -> ProgressStore:
        """Load every progress record saved for a word list."""
        entries = (
            self.db.query(WordProgressEntry)
            .filter(WordProgressEntry.list_name == list_name)
            .all()
        )
        logger.info(f"Loaded {len(entries)} progress records for list {list_name!r}")
        return {
            entry.word_id: WordProgress(
                familiar_count=entry.familiar_count,
                next_available_step=entry.next_available_step,
            )
            for entry in entries
        }

    def _upsert_record(self, list_name: str, word_id: str, record: WordProgress) -> None:
        entry = self._get_entry(list_name, word_id)
        if entry is None:
            entry = WordProgressEntry(list_name=list_name, word_id=word_id)
            self.db.add(entry)
        entry.familiar_count = record.familiar_count
        entry.next_available_step = record.next_available_step

    def save_record(self, list_name: str, word_id: str, record: WordProgress) -> None:
        """Save the progress record of a single word."""
        self._upsert_record(list_name, word_id, record)
        self._commit("save_record")

    def save_store(self, list_name: str, store: ProgressStore) -> None:
        """Save all records of a progress store in one transaction."""
        for word_id, record in store.items():
            self._upsert_record(list_name, word_id, record)
        self._commit("save_store")
        logger.info(f"Saved {len(store)} progress records for list {list_name!r}")

    def load_position(self, list_name: str) -> Optional[Tuple[int, int]]:
        """Get the saved (index, step) of a word list, if any."""
        position = (
            self.db.query(PracticePosition)
            .filter(PracticePosition.list_name == list_name)
            .first()
        )
        if not position:
            return None
        return position.current_index, position.current_step

    def save_position(self, list_name: str, current_index: int, current_step: int) -> None:
        """Save where the session over a word list currently is."""
        position = (
            self.db.query(PracticePosition)
            .filter(PracticePosition.list_name == list_name)
            .first()
        )
        if position is None:
            position = PracticePosition(list_name=list_name)
            self.db.add(position)
        position.current_index = current_index
        position.current_step = current_step
        self._commit("save_position")

    def reset(self, list_name: str) -> None:
        """Delete all saved progress and the position of a word list."""
        self.db.query(WordProgressEntry).filter(WordProgressEntry.list_name == list_name).delete()
        self.db.query(PracticePosition).filter(PracticePosition.list_name == list_name).delete()
        self._commit("reset")
        logger.info(f"Progress for list {list_name!r} reset")

    def export_store(self, list_name: str) -> Dict[str, Dict[str, int]]:
        """Get the saved progress of a word list in its JSON form."""
        return store_to_dict(self.load_store(list_name))

    def import_store(self, list_name: str, data: Dict[str, Dict[str, Any]]) -> int:
        """Save progress given in its JSON form, replacing records of the same words.

        Returns:
            The number of records imported.
        """
        store = store_from_dict(data)
        self.save_store(list_name, store)
        return len(store)
