from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import ExitStack
from socket import AF_INET, AF_INET6, SOCK_DGRAM, has_ipv6 as HAS_IPV6, socket as Socket
from typing import Any

import pytest

_FAMILY_TO_LOCALHOST: dict[int, str] = {
    AF_INET: "127.0.0.1",
    AF_INET6: "::1",
}

_SUPPORTED_FAMILIES = tuple(_FAMILY_TO_LOCALHOST)


@pytest.fixture(params=_SUPPORTED_FAMILIES, ids=lambda f: str(getattr(f, "name", f)))
def socket_family(request: Any) -> int:
    return request.param


@pytest.fixture
def localhost_ip(socket_family: int) -> str:
    return _FAMILY_TO_LOCALHOST[socket_family]


@pytest.fixture
def udp_socket_factory(socket_family: int, localhost_ip: str) -> Iterator[Callable[[], Socket]]:
    if not HAS_IPV6 and socket_family == AF_INET6:
        pytest.skip("socket.has_ipv6 is False")

    socket_stack = ExitStack()

    def udp_socket_factory() -> Socket:
        sock = socket_stack.enter_context(Socket(socket_family, SOCK_DGRAM))
        try:
            sock.bind((localhost_ip, 0))
        except OSError as exc:
            pytest.skip(f"Cannot bind to {localhost_ip}: {exc}")
        sock.settimeout(3)
        return sock

    with socket_stack:
        yield udp_socket_factory


@pytest.fixture
def server(udp_socket_factory: Callable[[], Socket]) -> Socket:
    return udp_socket_factory()
