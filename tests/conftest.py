import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Ensure project root is on sys.path for CI environments where
# Python might not automatically include it (e.g., some GitHub
# Actions runners invoking pytest differently).
PROJECT_ROOT = Path(__file__).parent.parent.resolve()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from config.config_loader import ConfigLoader
from services.ownership_store import OwnershipStore
from services.team_channel_service import TeamChannelService
from services.theme_service import ThemeService
from tests.factories import FakeBot, FakeGuild, make_config


@pytest.fixture
def test_config():
    """Install a known config for the duration of a test."""
    saved = (ConfigLoader._config, ConfigLoader._config_status, ConfigLoader._config_path)
    ConfigLoader._config = make_config()
    ConfigLoader._config_status = "ok"
    yield ConfigLoader._config
    ConfigLoader._config, ConfigLoader._config_status, ConfigLoader._config_path = saved


@pytest.fixture
def ownership_path(tmp_path) -> Path:
    return tmp_path / "data" / "team_channels.json"


@pytest.fixture
def themes_path(tmp_path) -> Path:
    return tmp_path / "data" / "themes.json"


@pytest_asyncio.fixture()
async def ownership_store(ownership_path):
    store = OwnershipStore(ownership_path)
    await store.initialize()
    yield store
    await store.shutdown()


@pytest_asyncio.fixture()
async def team_service(ownership_store):
    service = TeamChannelService(ownership_store)
    await service.initialize()
    yield service
    await service.shutdown()


@pytest_asyncio.fixture()
async def theme_service(themes_path):
    service = ThemeService(themes_path)
    await service.initialize()
    yield service
    await service.shutdown()


@pytest.fixture
def guild() -> FakeGuild:
    return FakeGuild()


@pytest.fixture
def bot(team_service, theme_service) -> FakeBot:
    """A bot-like object whose ``services`` exposes the real services."""
    services = type(
        "Services",
        (),
        {
            "team_channels": team_service,
            "ownership_store": team_service.store,
            "themes": theme_service,
        },
    )()
    return FakeBot(services=services)
