"""
Shared fixtures.

Models are built in memory (see factories.py); services get AsyncMock
repositories patched in where they are constructed.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from factories import make_profile
from src.shared.models import Profile, UserRole


@pytest.fixture
def admin() -> Profile:
    return make_profile(UserRole.ADMIN)


@pytest.fixture
def editor() -> Profile:
    return make_profile(UserRole.EDITOR)


@pytest.fixture
def reader() -> Profile:
    return make_profile(UserRole.READER)


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.info = {}
    return session
