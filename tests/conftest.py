import os

# Pygame must never try to open a real window during tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from config import EffectConfig, CIRCLES, ORBIT
from geometry import Surface


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def circle_config():
    return EffectConfig.defaults(CIRCLES)


@pytest.fixture
def orbit_config():
    return EffectConfig.defaults(ORBIT)


@pytest.fixture
def surface():
    return Surface(668.8, 400.0, 177.6, 141.0, False)
