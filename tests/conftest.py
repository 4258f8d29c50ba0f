"""Pytest configuration and shared fixtures."""

import sys
import asyncio
import inspect
from pathlib import Path

import httpx
import pytest

# Ensure src directory is in Python path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mytodos.config import Config, ConfigModel, reset_config  # noqa: E402
from mytodos.store import TaskStore, get_task_store  # noqa: E402
from mytodos.web.server import create_app  # noqa: E402


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem):
    """Execute async tests without external plugins."""
    testfunction = pyfuncitem.obj
    if inspect.iscoroutinefunction(testfunction):
        loop = asyncio.new_event_loop()
        try:
            asyncio.set_event_loop(loop)
            sig = inspect.signature(testfunction)
            call_kwargs = {name: pyfuncitem.funcargs[name] for name in sig.parameters}
            loop.run_until_complete(testfunction(**call_kwargs))
        finally:
            asyncio.set_event_loop(None)
            loop.close()
        return True
    return None


@pytest.fixture
def test_config(tmp_path):
    """Configuration pointing at a temporary data directory."""
    config = ConfigModel(data_dir=str(tmp_path / "data"))
    Config._instance = config
    yield config
    reset_config()


@pytest.fixture
def store():
    """A fresh, empty task store."""
    return TaskStore()


@pytest.fixture
def server_app(store, test_config):
    """The web app wired to the test store."""
    app = create_app(test_config)
    app.dependency_overrides[get_task_store] = lambda: store
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def online_transport(server_app):
    """httpx transport that talks to the in-process server."""
    return httpx.ASGITransport(app=server_app)


@pytest.fixture
def offline_transport():
    """httpx transport for a store that cannot be reached."""
    def handler(request):
        raise httpx.ConnectError("Connection refused", request=request)

    return httpx.MockTransport(handler)
