"""Server-side network helpers."""

import socket
from unittest.mock import patch

from pocketwriter.services import network_service


def test_preferred_address_skips_loopback_and_link_local():
    addresses = ["127.0.0.1", "169.254.1.1", "172.20.0.5", "192.168.1.2"]

    assert network_service.get_preferred_address(addresses) == "172.20.0.5"


def test_preferred_address_defaults_to_loopback():
    assert network_service.get_preferred_address([]) == "127.0.0.1"
    assert network_service.get_preferred_address(["169.254.0.9"]) == "127.0.0.1"


def test_local_addresses_always_non_empty():
    with patch.object(network_service.socket, "gethostbyname_ex", side_effect=OSError("no dns")), \
         patch.object(network_service, "get_outbound_ipv4", return_value=None):
        assert network_service.get_all_local_ip_addresses() == ["127.0.0.1"]


def test_local_addresses_put_outbound_first_without_duplicates():
    with patch.object(network_service.socket, "gethostbyname_ex",
                      return_value=("devbox", [], ["127.0.1.1", "10.0.0.4", "192.168.1.9"])), \
         patch.object(network_service, "get_outbound_ipv4", return_value="192.168.1.9"):
        assert network_service.get_all_local_ip_addresses() == ["192.168.1.9", "10.0.0.4"]


def test_find_available_port_skips_busy_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        taken = busy.getsockname()[1]

        port = network_service.find_available_port(taken, taken + 20, host="127.0.0.1")

    assert port is not None
    assert port != taken
    assert taken < port <= taken + 20


def test_find_available_port_returns_none_when_range_busy():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as busy:
        busy.bind(("127.0.0.1", 0))
        busy.listen(1)
        taken = busy.getsockname()[1]

        assert network_service.find_available_port(taken, taken, host="127.0.0.1") is None


def test_outbound_address_becomes_preferred_over_bridge_address():
    with patch.object(network_service.socket, "gethostbyname_ex",
                      return_value=("devbox", [], ["172.17.0.1", "192.168.1.9"])), \
         patch.object(network_service, "get_outbound_ipv4", return_value="192.168.1.9"):
        addresses = network_service.get_all_local_ip_addresses()

    assert addresses == ["192.168.1.9", "172.17.0.1"]
    assert network_service.get_preferred_address(addresses) == "192.168.1.9"
