"""
ServiceContainer lifecycle tests.
"""

import pytest

from services.service_container import ServiceContainer
from utils.types import ServiceStatus


@pytest.mark.asyncio
async def test_initialize_and_cleanup(ownership_path, themes_path):
    container = ServiceContainer(ownership_file=ownership_path, themes_file=themes_path)
    await container.initialize()

    assert container.team_channels.store is container.ownership_store
    assert container.ownership_store.status is ServiceStatus.READY
    assert container.themes.status is ServiceStatus.READY

    snapshot = await container.health_snapshot()
    assert set(snapshot) == {"ownership_store", "team_channels", "themes"}
    assert all(s["initialized"] for s in snapshot.values())

    await container.cleanup()
    with pytest.raises(RuntimeError):
        container.team_channels


@pytest.mark.asyncio
async def test_services_unavailable_before_initialize(ownership_path, themes_path):
    container = ServiceContainer(ownership_file=ownership_path, themes_file=themes_path)
    with pytest.raises(RuntimeError):
        container.ownership_store
    with pytest.raises(RuntimeError):
        container.themes


@pytest.mark.asyncio
async def test_double_initialize_is_noop(ownership_path, themes_path):
    container = ServiceContainer(ownership_file=ownership_path, themes_file=themes_path)
    await container.initialize()
    store = container.ownership_store

    await container.initialize()

    assert container.ownership_store is store
    await container.cleanup()
