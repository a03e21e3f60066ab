# Copyright 2021-2025, Francis Clairicia-Rose-Claire-Josephine
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
from __future__ import annotations

__all__ = [
    "check_inet_socket_family",
    "check_port",
    "config_or_default",
    "exception_with_notes",
    "get_callable_name",
    "ipv4_mapped_sockaddr",
    "missing_extra_deps",
    "open_dualstack_datagram_socket",
    "resolve_datagram_address",
]

import functools
import socket as _socket
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

_T_Exception = TypeVar("_T_Exception", bound=BaseException)
_T_Config = TypeVar("_T_Config")


def exception_with_notes(exc: _T_Exception, notes: str | Iterable[str]) -> _T_Exception:
    if isinstance(notes, str):
        notes = (notes,)
    for note in notes:
        exc.add_note(note)
    return exc


def missing_extra_deps(extra_name: str, *, feature_name: str = "") -> ModuleNotFoundError:
    if not feature_name:
        feature_name = extra_name
    return exception_with_notes(
        ModuleNotFoundError(f"{feature_name} dependencies are missing. Consider adding {extra_name!r} extra"),
        [f'example: pip install "logudp[{extra_name}]"'],
    )


def config_or_default(config: _T_Config | None, config_cls: type[_T_Config], what: str) -> _T_Config:
    if config is None:
        return config_cls()
    if not isinstance(config, config_cls):
        raise TypeError(f"Invalid {what} config: expected {config_cls.__name__}, got {type(config).__name__}")
    return config


def check_inet_socket_family(family: int) -> None:
    if family not in {_socket.AF_UNSPEC, _socket.AF_INET, _socket.AF_INET6}:
        raise ValueError("Only these families are supported: AF_UNSPEC, AF_INET, AF_INET6")


def check_port(port: int) -> None:
    # bool is an int subclass
    if not isinstance(port, int) or isinstance(port, bool):
        raise TypeError(f"Expected an integer port, got {port!r}")
    if not (0 <= port <= 65535):
        raise ValueError(f"Port number out of range: {port}")


def resolve_datagram_address(host: str, port: int, family: int) -> tuple[int, tuple[Any, ...]]:
    """Returns the first ``(family, sockaddr)`` pair :func:`socket.getaddrinfo` gives for a UDP destination.

    Numeric addresses are not looked up by the resolver.
    """
    infos = _socket.getaddrinfo(host, port, family=family, type=_socket.SOCK_DGRAM)
    if not infos:
        raise OSError(f"getaddrinfo({host!r}) returned empty list")
    info_family, _, _, _, sockaddr = infos[0]
    return info_family, sockaddr


def ipv4_mapped_sockaddr(sockaddr: tuple[Any, ...]) -> tuple[str, int, int, int]:
    host, port = sockaddr[:2]
    return (f"::ffff:{host}", port, 0, 0)


def open_dualstack_datagram_socket() -> _socket.socket:
    """Opens an ``AF_INET6`` UDP socket which also sends to IPv4-mapped addresses."""
    socket = _socket.socket(_socket.AF_INET6, _socket.SOCK_DGRAM)
    try:
        socket.setsockopt(_socket.IPPROTO_IPV6, _socket.IPV6_V6ONLY, False)
    except BaseException:
        socket.close()
        raise
    return socket


def get_callable_name(func: Callable[..., Any]) -> str:
    while isinstance(func, functools.partial):
        func = func.func
    qualname: str | None = getattr(func, "__qualname__", None) or getattr(func, "__name__", None)
    if not qualname:
        # Callable instance
        return type(func).__qualname__
    module: str | None = getattr(func, "__module__", None)
    if not module:
        return qualname
    return f"{module}.{qualname}"
