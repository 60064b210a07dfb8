"""
Pocket Writer — Test Configuration (conftest.py)
=================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (service unit tests)
    ├── database:        Real SQLite schema, created and dropped per test
    ├── test_client:     HTTPX AsyncClient wired to the FastAPI app
    └── discovery_settings: DiscoverySettings with tiny candidate tables

The environment is configured BEFORE anything from pocketwriter is imported,
because settings and the engine are built at import time.
"""

import os
import tempfile

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

_TEST_DIR = tempfile.mkdtemp(prefix="pocketwriter_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TEST_DIR, 'test.db')}"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SEED_INITIAL_DATA"] = "false"
os.environ["BACKEND_PORT"] = "8080"
os.environ["DISCOVERY_CONFIG_PATH"] = os.path.join(_TEST_DIR, "backend.json")

from datetime import datetime, timezone  # noqa: E402
from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from pocketwriter.database import Base, engine  # noqa: E402
from pocketwriter.discovery.settings import DiscoverySettings  # noqa: E402
from pocketwriter.models import Article, Template  # noqa: E402,F401

FIXED_NOW = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Service-Level Fixtures (no database)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    flush() behaves like the real thing for new rows: every object passed
    to add() gets an id and server timestamps, so response models can be
    built from it.

    Usage:
        async def test_get_template(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = row
    """
    added = []

    async def flush():
        for index, obj in enumerate(added, start=1):
            if getattr(obj, "id", None) is None:
                obj.id = index
            obj.created_at = FIXED_NOW
            obj.updated_at = FIXED_NOW

    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock(side_effect=flush)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock(side_effect=added.append)
    session.added = added
    return session


def query_result(rows=None, scalar=None, one=None):
    """Build a MagicMock shaped like an AsyncSession.execute() result."""
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows or []
    result.scalar.return_value = scalar
    result.scalar_one_or_none.return_value = one
    return result


@pytest.fixture
def sample_template():
    return Template(
        id=1,
        name="Simple Blog Post",
        structure_description='[{"element_id": "title1", "type": "text_block"}]',
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )


@pytest.fixture
def sample_article():
    return Article(
        id=7,
        title="Welcome to Pocket Writer!",
        content_data='{"article_elements": []}',
        preview_text="Get started",
        thumbnail_url="https://images.example.com/cover.jpg",
        template_id=1,
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )


# ══════════════════════════════════════════════════════════════════════════
# Database & HTTP Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database():
    """
    Fresh SQLite schema for one test.

    ASGITransport does not run the app lifespan, so tables are created
    here directly from the model metadata.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    # Pooled aiosqlite connections belong to this test's event loop
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(database):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_ping(test_client):
            response = await test_client.get("/api/ping")
            assert response.status_code == 200
    """
    from pocketwriter.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Discovery Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def discovery_settings(tmp_path):
    """
    Small, deterministic candidate tables.

    Range scanning is off so a failed scan stays short; tests that need
    the range switch it back on explicitly.
    """
    return DiscoverySettings(
        config_path=tmp_path / "backend.json",
        known_hosts="127.0.0.1",
        private_prefixes="192.168.0",
        suffixes_per_prefix=2,
        common_ports="8080,8081",
        port_range_scan=False,
        probe_timeout=0.2,
        host_check_timeout=0.2,
        info_timeout=0.5,
    )


class FakeProber:
    """
    Scripted stand-in for ReachabilityProber.

    open_ports:  {(host, port), ...} that accept connections
    up_hosts:    hosts whose echo-port check succeeds; defaults to every
                 host that has an open port
    Every call is recorded in `calls` as ("port", host, port) or ("host", host).
    """

    def __init__(self, open_ports=(), up_hosts=None):
        self.open_ports = set(open_ports)
        self.up_hosts = set(up_hosts) if up_hosts is not None else {h for h, _ in self.open_ports}
        self.calls = []

    async def is_reachable(self, host, port, timeout=None):
        self.calls.append(("port", host, port))
        return (host, port) in self.open_ports

    async def is_host_reachable(self, host, timeout=None):
        self.calls.append(("host", host))
        return host in self.up_hosts


@pytest.fixture
def fake_prober_factory():
    return FakeProber


@pytest.fixture
def make_result():
    return query_result
