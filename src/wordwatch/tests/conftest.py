"""Test configuration."""
import os
import tempfile
from pathlib import Path
from typing import Generator, List

import pytest
from dotenv import load_dotenv
from faker import Faker
from sqlalchemy.orm import Session

# Set test environment before any imports
os.environ["ENV"] = "test"
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="wordwatch-test-"))
os.environ.setdefault("DATABASE_URL", "sqlite://")

# Load test environment variables
test_env_path = Path(__file__).parent.parent.parent.parent / ".env.test"
load_dotenv(test_env_path)

# Import after environment setup
from wordwatch.config import ensure_directories
from wordwatch.models.base import SessionLocal, drop_db, init_db
from wordwatch.models.word_models import Word

fake = Faker()


@pytest.fixture(autouse=True)
def setup_test_environment():
    """Set up test environment before each test."""
    ensure_directories()
    yield


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    init_db()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        drop_db()


def make_words(count: int) -> List[Word]:
    """Create a list of distinct words."""
    texts = [f"{fake.word()}-{i}" for i in range(count)]
    return [
        Word(
            id=f"w{i}",
            text=text,
            phonetic=f"/{text}/",
            meaning=fake.word(),
            example=fake.sentence(),
        )
        for i, text in enumerate(texts)
    ]


@pytest.fixture
def words() -> List[Word]:
    """Create a three word list."""
    return make_words(3)


@pytest.fixture
def word_factory():
    """Get a factory for word lists of a given size."""
    return make_words
