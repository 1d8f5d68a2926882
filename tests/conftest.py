"""Shared pytest fixtures"""

import pytest

from roteiro.config import Settings
from roteiro.secrets import MemoryCredentialStore
from tests.mocks.fixtures import FakeClock, FakeScheduler, make_script_params
from tests.mocks.transport import MockTransport


# ============================================================
# Transport and time
# ============================================================

@pytest.fixture
def transport():
    """Fresh recording transport for each test"""
    return MockTransport()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    """Scheduler whose sleeps advance ``clock``"""
    return FakeScheduler(clock)


# ============================================================
# Credentials and settings
# ============================================================

@pytest.fixture
def credentials():
    """Memory store with a key for every integrated provider"""
    return MemoryCredentialStore({
        "gemini_api_key": "gem-key",
        "openai_api_key": "sk-test",
        "claude_api_key": "claude-key",
        "grok_api_key": "xai-key",
        "mistral_api_key": "mistral-key",
        "deepseek_api_key": "deepseek-key",
        "perplexity_api_key": "pplx-key",
        "leonardo_api_key": "leo-key",
        "elevenlabs_api_key": "xi-key",
        "youtube_api_key": "yt-key",
    })


@pytest.fixture
def empty_credentials():
    return MemoryCredentialStore()


@pytest.fixture
def settings():
    """Settings with no environment or .env influence"""
    return Settings(_env_file=None, credential_backend="memory")


# ============================================================
# Test Data Fixtures
# ============================================================

@pytest.fixture
def script_params():
    """Script form with required fields filled"""
    return make_script_params()


# ============================================================
# Markers Configuration
# ============================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks integration tests"
    )
    config.addinivalue_line(
        "markers", "live_api: marks tests that hit real APIs (requires keys)"
    )
