import os

# pygame без окна и звука
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import random

import pytest

from config.settings import SessionConfig
from game.session import Session


@pytest.fixture
def session():
    return Session(SessionConfig(seed=7))


@pytest.fixture
def rng():
    return random.Random(42)
