"""Loading word lists from JSON files."""
import json
import logging
import re
from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from wordwatch import monitoring
from wordwatch.models.word_models import Word

logger = logging.getLogger(__name__)

TRAILING_COMMA_RE = re.compile(r",\s*([\]}])")

# Full-width punctuation that slips in when lists are typed with a CJK keyboard
PUNCTUATION_FIXES = {
    "，": ",",
    "：": ":",
}


def sanitize_json_text(text: str) -> str:
    """Fix common data-entry punctuation mistakes in a JSON document."""
    sanitized = text
    for wrong, right in PUNCTUATION_FIXES.items():
        sanitized = sanitized.replace(wrong, right)

    # Remove trailing commas before ']' or '}'
    return TRAILING_COMMA_RE.sub(r"\1", sanitized)


def _word_from_dict(item: Dict[str, Any]) -> Optional[Word]:
    text = item.get("text")
    if not isinstance(text, str) or not text:
        return None
    word_id = item.get("id") or text
    return Word(
        id=str(word_id),
        text=text,
        phonetic=str(item.get("phonetic") or ""),
        meaning=str(item.get("meaning") or ""),
        example=str(item.get("example") or ""),
    )


def decode_words(text: str) -> Optional[List[Word]]:
    """Decode a JSON array of word objects.

    Returns None if the text is not a JSON array. Entries that are not objects
    or have no ``text`` are skipped.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    if not isinstance(data, list):
        return None

    words = []
    for position, item in enumerate(data):
        word = _word_from_dict(item) if isinstance(item, dict) else None
        if word is None:
            logger.warning(f"Skipping malformed word entry at position {position}")
            continue
        words.append(word)
    return words


def find_duplicate_ids(words: List[Word]) -> List[str]:
    """Get identifiers used by more than one word."""
    counts = Counter(word.id for word in words)
    return [word_id for word_id, count in counts.items() if count > 1]


def load_words(path: Union[str, Path]) -> List[Word]:
    """Load a word list, repairing punctuation if the file does not parse as is.

    A missing or unreadable file gives an empty list.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Could not read word list {path}: {e}")
        monitoring.error_count.labels(error_type="word_list_read").inc()
        monitoring.words_loaded.set(0)
        return []

    words = decode_words(text)
    if words is None:
        logger.info(f"Word list {path} did not parse, retrying after punctuation repair")
        words = decode_words(sanitize_json_text(text))
        if words is None:
            logger.error(f"Word list {path} is not a valid JSON array of words")
            monitoring.error_count.labels(error_type="word_list_decode").inc()
            monitoring.words_loaded.set(0)
            return []
        monitoring.word_list_repairs.inc()

    duplicates = find_duplicate_ids(words)
    if duplicates:
        # Progress is keyed by id, so these words share one record
        logger.warning(f"Word list {path} has duplicate ids: {duplicates}")

    logger.info(f"Loaded {len(words)} words from {path}")
    monitoring.words_loaded.set(len(words))
    return words
