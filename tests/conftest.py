from datetime import datetime, timedelta, timezone

import pytest

from srs_core.fsrs import database
from srs_core.fsrs.config import SchedulerConfig
from srs_core.fsrs.constants import CardPhase
from srs_core.fsrs.memory_state import CardScheduleState


@pytest.fixture
def now():
    return datetime(2026, 3, 14, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def config():
    return SchedulerConfig()


@pytest.fixture
def review_card_state(now):
    """A card in REVIEW that is exactly due, last seen `stability` days ago."""
    def _make(stability=10.0, difficulty=5.0, repetitions=3, lapses=0, phase=CardPhase.REVIEW):
        return CardScheduleState(
            due=now,
            stability=stability,
            difficulty=difficulty,
            repetitions=repetitions,
            state=phase,
            lapses=lapses,
            last_review=now - timedelta(days=stability),
        )
    return _make


@pytest.fixture
def engine():
    engine = database.get_engine("sqlite://")
    database.init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    session = database.get_session(engine)
    yield session
    session.close()
