from __future__ import annotations

import random

import pytest

from web import create_app


class ZeroNoiseRandom(random.Random):
    """Random source whose ``random()`` is always 0.0, so greedy play has no noise."""

    def random(self) -> float:
        return 0.0


@pytest.fixture
def zero_rng() -> ZeroNoiseRandom:
    return ZeroNoiseRandom(0)


@pytest.fixture
def app():
    return create_app({"RANDOM_SEED": 1234, "OPPONENT_DELAY_MS": 0})


@pytest.fixture
def client(app):
    return app.test_client()
