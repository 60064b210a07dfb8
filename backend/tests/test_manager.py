"""
Connection manager and connection status.

What we test:
    ✅ discover() drives DISCOVERING → CONNECTED / DISCONNECTED / ERROR
    ✅ a rejected concurrent discovery does not touch the state
    ✅ test_connection() drives TESTING → CONNECTED / DISCONNECTED
    ✅ update_config() validates before persisting
    ✅ base_url per environment
"""

import asyncio

import httpx
import pytest

from pocketwriter.discovery.config_store import InMemoryConfigStore
from pocketwriter.discovery.manager import build_connection_manager
from pocketwriter.discovery.models import BackendEndpoint, ConnectionState, Environment
from pocketwriter.discovery.status import ConnectionStatus
from pocketwriter.exceptions import ConfigStoreError

NO_SERVER_INFO = httpx.MockTransport(lambda request: httpx.Response(404))


def make_manager(settings, prober, store=None):
    manager = build_connection_manager(
        settings=settings,
        store=store or InMemoryConfigStore(),
        prober=prober,
        transport=NO_SERVER_INFO,
    )
    manager.resolver._device_ip_provider = lambda: None
    return manager


class RecordingListener:
    def __init__(self):
        self.transitions = []

    def __call__(self, previous, current):
        self.transitions.append((previous, current))


class TestConnectionStatus:
    def test_notifies_on_change_only(self):
        status = ConnectionStatus()
        listener = RecordingListener()
        status.subscribe(listener)

        status.set(ConnectionState.TESTING)
        status.set(ConnectionState.TESTING)
        status.set(ConnectionState.CONNECTED)

        assert listener.transitions == [
            (ConnectionState.UNKNOWN, ConnectionState.TESTING),
            (ConnectionState.TESTING, ConnectionState.CONNECTED),
        ]

    def test_unsubscribe_and_failing_listener(self):
        status = ConnectionStatus()
        good = RecordingListener()

        def broken(previous, current):
            raise RuntimeError("listener bug")

        status.subscribe(broken)
        unsubscribe = status.subscribe(good)
        status.set(ConnectionState.DISCOVERING)
        unsubscribe()
        status.set(ConnectionState.CONNECTED)

        assert good.transitions == [(ConnectionState.UNKNOWN, ConnectionState.DISCOVERING)]
        assert status.state == ConnectionState.CONNECTED


class TestDiscover:
    @pytest.mark.asyncio
    async def test_success_ends_connected(self, discovery_settings, fake_prober_factory):
        manager = make_manager(discovery_settings, fake_prober_factory(open_ports={("10.0.2.2", 8080)}))
        listener = RecordingListener()
        manager.status.subscribe(listener)

        result = await manager.discover()

        assert result.success is True
        assert [t[1] for t in listener.transitions] == [
            ConnectionState.DISCOVERING,
            ConnectionState.CONNECTED,
        ]

    @pytest.mark.asyncio
    async def test_exhaustion_ends_disconnected(self, discovery_settings, fake_prober_factory):
        manager = make_manager(discovery_settings, fake_prober_factory())

        result = await manager.discover()

        assert result.success is False
        assert manager.state == ConnectionState.DISCONNECTED

    @pytest.mark.asyncio
    async def test_store_failure_ends_in_error(self, discovery_settings, fake_prober_factory):
        class BrokenStore(InMemoryConfigStore):
            async def save(self, endpoint):
                raise ConfigStoreError()

        manager = make_manager(
            discovery_settings, fake_prober_factory(open_ports={("10.0.2.2", 8080)}), BrokenStore()
        )

        result = await manager.discover()

        assert result.success is False
        assert manager.state == ConnectionState.ERROR

    @pytest.mark.asyncio
    async def test_rejected_discovery_leaves_state_alone(self, discovery_settings, fake_prober_factory):
        gate = asyncio.Event()

        class SlowProber(fake_prober_factory):
            async def is_reachable(self, host, port, timeout=None):
                await gate.wait()
                return await super().is_reachable(host, port, timeout)

        manager = make_manager(discovery_settings, SlowProber(open_ports={("10.0.2.2", 8080)}))
        first = asyncio.create_task(manager.discover())
        await asyncio.sleep(0)
        listener = RecordingListener()
        manager.status.subscribe(listener)

        second = await manager.discover()

        assert second.success is False
        assert manager.state == ConnectionState.DISCOVERING
        assert listener.transitions == []

        gate.set()
        await first
        assert manager.state == ConnectionState.CONNECTED


class TestTestConnection:
    @pytest.mark.asyncio
    async def test_reachable(self, discovery_settings, fake_prober_factory):
        manager = make_manager(discovery_settings, fake_prober_factory(open_ports={("10.0.2.2", 8080)}))

        assert await manager.test_connection() is True
        assert manager.state == ConnectionState.CONNECTED

    @pytest.mark.asyncio
    async def test_unreachable(self, discovery_settings, fake_prober_factory):
        prober = fake_prober_factory()
        manager = make_manager(discovery_settings, prober)

        assert await manager.test_connection() is False
        assert manager.state == ConnectionState.DISCONNECTED
        assert prober.calls == [("port", "10.0.2.2", 8080)]


class TestUpdateConfig:
    @pytest.mark.asyncio
    async def test_valid_pair_is_persisted(self, discovery_settings, fake_prober_factory):
        store = InMemoryConfigStore()
        manager = make_manager(discovery_settings, fake_prober_factory(), store)

        assert await manager.update_config("192.168.1.50", 8081) is True

        saved = await store.load()
        assert (saved.host, saved.port) == ("192.168.1.50", 8081)
        assert saved.resolved_at is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize("host, port", [("", 8080), ("bad host", 8080), ("10.0.0.1", 0), ("10.0.0.1", 65536)])
    async def test_invalid_pair_is_rejected(self, discovery_settings, fake_prober_factory, host, port):
        store = InMemoryConfigStore()
        manager = make_manager(discovery_settings, fake_prober_factory(), store)

        assert await manager.update_config(host, port) is False
        assert store.save_count == 0


class TestBaseUrl:
    @pytest.mark.asyncio
    async def test_environments(self, discovery_settings, fake_prober_factory):
        store = InMemoryConfigStore(BackendEndpoint(host="192.168.1.50", port=8081))
        manager = make_manager(discovery_settings, fake_prober_factory(), store)

        assert await manager.base_url() == "http://192.168.1.50:8081/api"
        assert await manager.base_url(Environment.STAGING) == discovery_settings.staging_url
        assert await manager.base_url(Environment.PRODUCTION) == "https://api.storycanvas.com/api"
