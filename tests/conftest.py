"""Pytest fixtures for emojify tests."""

import numpy as np
import pytest

from helpers import BLUE, RED, solid_rgba

from emojify.emoji import Emoji


@pytest.fixture
def background():
    """400x400 black RGB picture."""
    return np.zeros((400, 400, 3), dtype=np.uint8)


@pytest.fixture
def noisy_background():
    """Random RGB picture, so that any unintended write shows up."""
    rng = np.random.default_rng(0)
    return rng.integers(0, 256, size=(120, 160, 3), dtype=np.uint8)


@pytest.fixture
def color_assets():
    """Opaque 100x50 stickers: red for SMILING, blue for FROWNING."""
    return {
        Emoji.SMILING: solid_rgba(50, 100, RED),
        Emoji.FROWNING: solid_rgba(50, 100, BLUE),
    }
