"""Tests for configuration settings."""
import pytest

from wordwatch.config import (
    DATA_DIR,
    GAP_BASE_RATIO,
    GAP_CAP_RATIO,
    LearningSettings,
    PracticeSettings,
    Settings,
    settings,
)


def test_data_directory_exists():
    """Test that the data directory is created."""
    assert DATA_DIR.exists()


def test_settings_defaults():
    """Test default settings values."""
    assert settings.learning.gap_base_ratio == GAP_BASE_RATIO == 0.02
    assert settings.learning.gap_cap_ratio == GAP_CAP_RATIO == 0.6
    assert settings.practice.word_list_name == "words"
    assert settings.database.url == "sqlite://"


def test_validate_accepts_defaults():
    """Test that the default settings are valid."""
    Settings().validate()


@pytest.mark.parametrize(
    "learning",
    [
        LearningSettings(gap_base_ratio=0.0),
        LearningSettings(gap_cap_ratio=1.5),
        LearningSettings(gap_base_ratio=0.5, gap_cap_ratio=0.4),
    ],
)
def test_validate_rejects_bad_ratios(learning: LearningSettings):
    """Test that out-of-range ratios are rejected."""
    with pytest.raises(ValueError):
        Settings(learning=learning).validate()


def test_validate_rejects_negative_delay():
    """Test that a negative feedback delay is rejected."""
    with pytest.raises(ValueError):
        Settings(practice=PracticeSettings(feedback_delay=-1.0)).validate()
