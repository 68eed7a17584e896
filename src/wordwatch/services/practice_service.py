"""Practice session over one word list."""
import logging
from typing import List, Optional, Sequence

from wordwatch import monitoring
from wordwatch.config import settings
from wordwatch.models.word_models import NavigationAction, ProgressStore, Word, WordProgress
from wordwatch.services import spacing_engine
from wordwatch.services.progress_service import ProgressService

logger = logging.getLogger(__name__)


class PracticeSession:
    """Owns the position, timeline step and progress store of one session.

    Two sessions over the same list must not share a store.
    """

    def __init__(
        self,
        words: Sequence[Word],
        list_name: str = "words",
        store: Optional[ProgressStore] = None,
        current_index: int = 0,
        current_step: int = 0,
        progress_service: Optional[ProgressService] = None,
    ):
        """Initialize the session with a word list and optional saved state."""
        self.words: List[Word] = list(words)
        self.list_name = list_name
        self.store: ProgressStore = dict(store or {})
        self.current_index = current_index if 0 <= current_index < len(self.words) else 0
        self.current_step = current_step
        self.progress_service = progress_service
        self.details_expanded = False

    @classmethod
    def restore(
        cls,
        words: Sequence[Word],
        list_name: str,
        progress_service: ProgressService,
    ) -> "PracticeSession":
        """Create a session from the progress and position saved for a list."""
        store = progress_service.load_store(list_name)
        index, step = progress_service.load_position(list_name) or (0, 0)
        if words and not 0 <= index < len(words):
            logger.warning(f"Saved index {index} is outside list {list_name!r} of {len(words)} words")
            index = index % len(words)
        return cls(
            words,
            list_name=list_name,
            store=store,
            current_index=index,
            current_step=step,
            progress_service=progress_service,
        )

    @property
    def is_empty(self) -> bool:
        """Check if there is nothing to practice."""
        return not self.words

    @property
    def current_word(self) -> Optional[Word]:
        """Get the word on screen, if any."""
        if self.is_empty:
            return None
        return self.words[self.current_index]

    def progress_for(self, word: Word) -> Optional[WordProgress]:
        """Get the progress record of a word, if it was ever marked familiar."""
        return self.store.get(word.id)

    def _save_position(self) -> None:
        if self.progress_service is not None:
            self.progress_service.save_position(self.list_name, self.current_index, self.current_step)

    def next_word(self) -> Optional[Word]:
        """Move to the next eligible word."""
        if self.is_empty:
            return None

        previous_step = self.current_step
        self.current_index, self.current_step = spacing_engine.advance(
            self.words, self.current_index, self.current_step, self.store
        )
        self.details_expanded = False

        monitoring.words_shown.labels(list_name=self.list_name).inc()
        if not spacing_engine.is_eligible(self.current_word.id, self.current_step, self.store):
            logger.info(f"Every word in {self.list_name!r} is on cooldown at step {previous_step}")
            monitoring.cooldown_fallbacks.labels(list_name=self.list_name).inc()

        self._save_position()
        return self.current_word

    def previous_word(self) -> Optional[Word]:
        """Move back one word without touching the timeline step."""
        if self.is_empty:
            return None
        self.current_index = spacing_engine.retreat(self.words, self.current_index)
        self.details_expanded = False
        self._save_position()
        return self.current_word

    def mark_familiar(self) -> Optional[WordProgress]:
        """Mark the word on screen familiar and move on.

        Returns:
            The updated progress record of the marked word, or None if the list is empty.
        """
        word = self.current_word
        if word is None:
            return None

        self.store = spacing_engine.mark_familiar(
            word,
            self.current_step,
            self.store,
            len(self.words),
            base_ratio=settings.learning.gap_base_ratio,
            cap_ratio=settings.learning.gap_cap_ratio,
        )
        record = self.store[word.id]
        logger.info(
            f"Marked {word.text!r} familiar ({record.familiar_count}x), "
            f"next at step {record.next_available_step}"
        )
        monitoring.words_marked_familiar.labels(list_name=self.list_name).inc()

        if self.progress_service is not None:
            self.progress_service.save_record(self.list_name, word.id, record)

        self.next_word()
        return record

    def toggle_details(self) -> bool:
        """Show or hide the meaning and example of the current word."""
        self.details_expanded = not self.details_expanded
        return self.details_expanded

    def handle(self, action: NavigationAction) -> Optional[Word]:
        """Apply a user action and return the word now on screen."""
        if action == NavigationAction.NEXT:
            self.next_word()
        elif action == NavigationAction.PREVIOUS:
            self.previous_word()
        elif action == NavigationAction.FAMILIAR:
            self.mark_familiar()
        elif action == NavigationAction.DETAILS:
            self.toggle_details()
        else:
            raise ValueError(f"Unknown action: {action}")
        return self.current_word
