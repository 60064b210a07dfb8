"""Host and port candidate generators."""

import itertools
import types

import pytest
from pydantic import ValidationError as SchemaError

from pocketwriter.discovery.candidates import (
    generate_host_candidates,
    generate_port_candidates,
    subnet_prefix,
)
from pocketwriter.discovery.settings import DiscoverySettings


def _settings(**overrides):
    base = dict(
        known_hosts="127.0.0.1",
        private_prefixes="192.168.0,10.0.0.7",
        suffixes_per_prefix=2,
        common_ports="8080,8081,8082,8090,8000,9000",
        port_range_scan=True,
        port_range_start=8000,
        port_range_end=9000,
    )
    base.update(overrides)
    return DiscoverySettings(**base)


class TestHostCandidates:
    def test_order_with_device_on_lan(self):
        hosts = list(generate_host_candidates("172.23.33.24", "192.168.1.37", _settings()))

        assert hosts[:4] == ["172.23.33.24", "10.0.2.2", "127.0.0.1", "192.168.1.1"]
        assert hosts[4] == "192.168.1.254"
        assert hosts[5:14] == [f"192.168.1.{n}" for n in range(2, 11)]
        assert hosts[14:] == ["192.168.0.1", "192.168.0.2", "10.0.0.7"]

    def test_no_duplicates(self):
        settings = _settings(known_hosts="10.0.2.2,192.168.1.1", private_prefixes="192.168.1")
        hosts = list(generate_host_candidates("192.168.1.1", "192.168.1.37", settings))

        assert len(hosts) == len(set(hosts))
        assert hosts[0] == "192.168.1.1"

    def test_emulator_device_ip_skips_subnet_step(self):
        hosts = list(generate_host_candidates(None, "10.0.2.15", _settings()))

        assert not any(h.startswith("10.0.2.") and h != "10.0.2.2" for h in hosts)
        assert hosts[:2] == ["10.0.2.2", "127.0.0.1"]

    def test_malformed_or_missing_device_ip_is_ignored(self):
        expected = ["10.0.2.2", "127.0.0.1", "192.168.0.1", "192.168.0.2", "10.0.0.7"]

        assert list(generate_host_candidates(None, None, _settings())) == expected
        assert list(generate_host_candidates(None, "not-an-ip", _settings())) == expected
        assert list(generate_host_candidates(None, "300.1.1.1", _settings())) == expected

    def test_is_lazy(self):
        candidates = generate_host_candidates("h", None, _settings())

        assert isinstance(candidates, types.GeneratorType)
        assert next(candidates) == "h"

    def test_subnet_prefix(self):
        assert subnet_prefix("192.168.1.37") == "192.168.1"
        assert subnet_prefix("10.0.2.16") is None
        assert subnet_prefix("") is None


class TestPortCandidates:
    def test_saved_then_common_then_range(self):
        ports = list(generate_port_candidates(8085, _settings()))

        assert ports[:7] == [8085, 8080, 8081, 8082, 8090, 8000, 9000]
        assert ports[7:10] == [8001, 8002, 8003]
        assert len(ports) == len(set(ports))
        assert set(ports) == set(range(8000, 9001))

    def test_range_scan_disabled(self):
        ports = list(generate_port_candidates(8080, _settings(port_range_scan=False)))

        assert ports == [8080, 8081, 8082, 8090, 8000, 9000]

    def test_invalid_saved_port_is_dropped(self):
        ports = list(generate_port_candidates(70000, _settings(port_range_scan=False)))

        assert 70000 not in ports
        assert ports[0] == 8080

    def test_range_is_not_materialised(self):
        settings = _settings(port_range_start=1, port_range_end=65535)
        first = list(itertools.islice(generate_port_candidates(None, settings), 8))

        assert first == [8080, 8081, 8082, 8090, 8000, 9000, 1, 2]

    def test_inverted_range_is_rejected(self):
        with pytest.raises(SchemaError, match="port_range_start"):
            _settings(port_range_start=9000, port_range_end=8000)

    def test_single_port_range_is_allowed(self):
        settings = _settings(common_ports="8080", port_range_start=8500, port_range_end=8500)

        assert list(generate_port_candidates(None, settings)) == [8080, 8500]
