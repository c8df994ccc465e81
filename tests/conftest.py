"""Test configuration and fixtures"""

import pytest
from aioresponses import aioresponses

from spot_sync.core.config import Config
from spot_sync.spotify.models import AccountRole, Credential


@pytest.fixture
def config():
    """Default configuration (page size 50, batch size 50)"""
    return Config()


@pytest.fixture
def primary():
    return Credential(role=AccountRole.PRIMARY, token="primary-token")


@pytest.fixture
def secondary():
    return Credential(role=AccountRole.SECONDARY, token="secondary-token")


@pytest.fixture
def credentials(primary, secondary):
    return {AccountRole.PRIMARY: primary, AccountRole.SECONDARY: secondary}


@pytest.fixture
def mock_api():
    """Intercept every aiohttp request"""
    with aioresponses() as m:
        yield m
