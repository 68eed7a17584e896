"""Tests for practice sessions."""
from typing import List

import pytest
from faker import Faker
from prometheus_client import REGISTRY
from sqlalchemy.orm import Session

from wordwatch.models.word_models import NavigationAction, Word, WordProgress
from wordwatch.services.practice_service import PracticeSession
from wordwatch.services.progress_service import ProgressService

fake = Faker()


def metric(name: str, list_name: str) -> float:
    """Get the current value of a per-list counter."""
    return REGISTRY.get_sample_value(name, {"list_name": list_name}) or 0.0


@pytest.fixture
def progress_service(db: Session) -> ProgressService:
    """Create a progress service instance."""
    return ProgressService(db)


def test_empty_session() -> None:
    """Test that an empty list makes every action a no-op."""
    session = PracticeSession([])

    assert session.is_empty
    assert session.current_word is None
    assert session.next_word() is None
    assert session.previous_word() is None
    assert session.mark_familiar() is None
    assert (session.current_index, session.current_step) == (0, 0)


def test_next_and_previous(words: List[Word]) -> None:
    """Test that moving back never changes the step."""
    session = PracticeSession(words)

    assert session.next_word() == words[1]
    assert session.current_step == 1
    assert session.previous_word() == words[0]
    assert session.previous_word() == words[2]
    assert session.current_step == 1
    assert session.next_word() == words[0]
    assert session.current_step == 2


def test_mark_familiar_moves_on(words: List[Word]) -> None:
    """Test marking familiar records progress and shows the next word."""
    session = PracticeSession(words)
    session.next_word()

    record = session.mark_familiar()

    assert record == WordProgress(familiar_count=1, next_available_step=2)
    assert session.store[words[1].id] == record
    assert (session.current_index, session.current_step) == (2, 2)


def test_familiar_word_held_back(word_factory) -> None:
    """Test that a just-marked word does not come straight back."""
    words = word_factory(100)
    session = PracticeSession(words)
    for _ in range(3):
        session.mark_familiar()

    # w0, w1, w2 marked at steps 0, 1, 2
    assert session.current_index == 3
    assert session.progress_for(words[0]) == WordProgress(familiar_count=1, next_available_step=2)


def test_details_reset_on_word_change(words: List[Word]) -> None:
    """Test the detail view closes when the word changes."""
    session = PracticeSession(words)

    assert session.toggle_details() is True
    session.next_word()
    assert session.details_expanded is False

    session.toggle_details()
    session.previous_word()
    assert session.details_expanded is False


def test_handle_actions(words: List[Word]) -> None:
    """Test dispatching navigation actions."""
    session = PracticeSession(words)

    assert session.handle(NavigationAction.NEXT) == words[1]
    assert session.handle(NavigationAction.PREVIOUS) == words[0]
    assert session.handle(NavigationAction.DETAILS) == words[0]
    assert session.details_expanded is True
    assert session.handle(NavigationAction.FAMILIAR) == words[1]
    assert words[0].id in session.store

    with pytest.raises(ValueError):
        session.handle("jump")


def test_invalid_start_index_is_reset(words: List[Word]) -> None:
    """Test an out-of-range start index."""
    assert PracticeSession(words, current_index=10).current_index == 0


def test_cooldown_fallback_metric(words: List[Word]) -> None:
    """Test the fallback is counted when every word is on cooldown."""
    list_name = fake.slug()
    store = {word.id: WordProgress(familiar_count=5, next_available_step=100) for word in words}
    session = PracticeSession(words, list_name=list_name, store=store)
    before = metric("wordwatch_cooldown_fallbacks_total", list_name)

    assert session.next_word() == words[1]
    assert session.current_step == 1
    assert metric("wordwatch_cooldown_fallbacks_total", list_name) == before + 1
    assert metric("wordwatch_words_shown_total", list_name) >= 1


def test_session_store_is_independent(words: List[Word]) -> None:
    """Test that a session does not write into the store it was given."""
    store = {}
    session = PracticeSession(words, store=store)
    session.mark_familiar()

    assert store == {}
    assert words[0].id in session.store


def test_progress_is_persisted(words: List[Word], progress_service: ProgressService) -> None:
    """Test that marks and moves are saved when a service is attached."""
    list_name = fake.slug()
    session = PracticeSession(words, list_name=list_name, progress_service=progress_service)

    session.mark_familiar()

    assert progress_service.load_store(list_name) == session.store
    assert progress_service.load_position(list_name) == (1, 1)


def test_restore(words: List[Word], progress_service: ProgressService) -> None:
    """Test resuming a session from saved state."""
    list_name = fake.slug()
    store = {words[2].id: WordProgress(familiar_count=1, next_available_step=9)}
    progress_service.save_store(list_name, store)
    progress_service.save_position(list_name, 1, 6)

    session = PracticeSession.restore(words, list_name, progress_service)

    assert session.store == store
    assert (session.current_index, session.current_step) == (1, 6)
    # w2 is on cooldown until step 9
    assert session.next_word() == words[0]
    assert session.current_step == 8


def test_restore_clamps_stale_index(words: List[Word], progress_service: ProgressService) -> None:
    """Test a saved index beyond a shrunken list."""
    list_name = fake.slug()
    progress_service.save_position(list_name, 7, 20)

    session = PracticeSession.restore(words, list_name, progress_service)

    assert (session.current_index, session.current_step) == (1, 20)


def test_restore_without_saved_state(words: List[Word], progress_service: ProgressService) -> None:
    """Test restoring a list that was never practiced."""
    session = PracticeSession.restore(words, fake.slug(), progress_service)

    assert session.store == {}
    assert (session.current_index, session.current_step) == (0, 0)
