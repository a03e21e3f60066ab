from __future__ import annotations

import itertools
from collections.abc import Callable
from socket import AF_INET, AF_INET6, IPPROTO_UDP, SOCK_DGRAM, socket as Socket
from typing import TYPE_CHECKING, Any

from logudp.serializers.abc import AbstractPacketSerializer

import pytest

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from pytest_mock import MockerFixture


@pytest.fixture
def mock_udp_socket_factory(mocker: MockerFixture) -> Callable[..., MagicMock]:
    fileno_counter = itertools.count()

    def factory(family: int = AF_INET) -> MagicMock:
        assert family in {AF_INET, AF_INET6}
        mock_socket = mocker.NonCallableMagicMock(spec=Socket)
        mock_socket.family = family
        mock_socket.type = SOCK_DGRAM
        mock_socket.proto = IPPROTO_UDP
        mock_socket.fileno.return_value = 123 + next(fileno_counter)

        def close_side_effect() -> None:
            mock_socket.fileno.return_value = -1

        def sendto_side_effect(data: bytes, address: Any) -> int:
            return len(data)

        mock_socket.close.side_effect = close_side_effect
        mock_socket.sendto.side_effect = sendto_side_effect
        return mock_socket

    return factory


@pytest.fixture
def mock_udp_socket(mock_udp_socket_factory: Callable[..., MagicMock]) -> MagicMock:
    return mock_udp_socket_factory()


@pytest.fixture
def mock_serializer_factory(mocker: MockerFixture) -> Callable[[], Any]:
    return lambda: mocker.NonCallableMagicMock(spec=AbstractPacketSerializer)


@pytest.fixture
def mock_serializer(mock_serializer_factory: Callable[[], Any]) -> Any:
    return mock_serializer_factory()
