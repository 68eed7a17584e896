"""Models for words and the in-memory progress they accumulate."""
from dataclasses import dataclass
from enum import Enum
from typing import Dict


@dataclass(frozen=True)
class Word:
    """A flashcard entry supplied by the word list."""
    id: str
    text: str
    phonetic: str = ""
    meaning: str = ""
    example: str = ""


@dataclass
class WordProgress:
    """Familiarity of a word and the first timeline step it may reappear at."""
    familiar_count: int = 0
    next_available_step: int = 0


# Keyed by Word.id
ProgressStore = Dict[str, WordProgress]


class NavigationAction(Enum):
    """Possible user actions while practicing."""
    NEXT = "next"  # Move to the next eligible word
    PREVIOUS = "previous"  # Move back one word, timeline unchanged
    FAMILIAR = "familiar"  # Mark the current word familiar, then move on
    DETAILS = "details"  # Toggle the meaning/example view
