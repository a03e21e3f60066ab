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
"""UDP log client implementation module.

Example:
    >>> from logudp.client import LogUDPClient
    >>> with LogUDPClient() as client:
    ...     client.send("Hi")  # Sent to 127.0.0.1:9999
    True
"""

from __future__ import annotations

__all__ = [
    "ClientConfig",
    "ErrorMode",
    "LogUDPClient",
]

import enum
import logging
import socket as _socket
import warnings
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Self, TypeAlias, final

from . import _utils
from .exceptions import ClientClosedError, EncodingError, InvocationError, TransmissionError
from .serializers import lookup_serializer
from .serializers.abc import AbstractPacketSerializer
from .serializers.callback import CallbackSerializer
from .serializers.pickle import PickleSerializer

_MISSING: Any = object()

AnySerializer: TypeAlias = AbstractPacketSerializer[Any, Any] | str | Callable[[Any], bytes]


@enum.unique
class ErrorMode(enum.Enum):
    """What :meth:`LogUDPClient.send` does when something goes wrong."""

    REPORT = "report"
    """Return :data:`False` (and log transmission errors)."""

    THROW = "throw"
    """Raise the error."""


@dataclass(kw_only=True)
class ClientConfig:
    """
    A dataclass with the client options.

    All the fields can be changed after the client creation, using the :class:`LogUDPClient` properties.
    """

    address: str = "127.0.0.1"
    """IP address or hostname of the listening server."""

    port: int = 9999
    """UDP port of the listening server."""

    error_mode: ErrorMode = ErrorMode.REPORT
    """The error policy."""

    family: int = _socket.AF_UNSPEC
    """Restricts the hostname resolution. Should be any of ``AF_UNSPEC``, ``AF_INET`` or ``AF_INET6``."""


@final
class LogUDPClient:
    """
    Sends serialized messages to a listening server, one UDP datagram per message.

    There is no delivery guarantee: a successful :meth:`send` only means that the operating system accepted the datagram.

    The client is not thread-safe. Use one client per thread, or guard the calls with a lock.
    """

    __slots__ = (
        "__address",
        "__port",
        "__error_mode",
        "__family",
        "__dualstack",
        "__serializer",
        "__socket",
        "__closed",
        "__logger",
        "__weakref__",
    )

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        serializer: AnySerializer | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """
        No I/O is performed here; the socket is created on the first :meth:`send`.

        Parameters:
            config: Parameter object to configure the destination and the error policy.
            serializer: The :term:`serializer` to use. It can be:

                        * An :class:`.AbstractPacketSerializer` instance.

                        * A preset name (e.g. ``"json"``), see :data:`.SERIALIZER_PRESETS`.

                        * An ``encode(message) -> bytes`` function.

                        Defaults to :class:`.PickleSerializer`.
            logger: The logger to use for diagnostics. Defaults to the module's logger.
        """
        config = _utils.config_or_default(config, ClientConfig, "client")
        _utils.check_inet_socket_family(config.family)

        self.__socket: _socket.socket | None = None
        self.__closed: bool = False
        self.__family: int = config.family
        self.__dualstack: bool = False
        self.__logger: logging.Logger = logger or logging.getLogger(__name__)
        self.__serializer: AbstractPacketSerializer[Any, Any] = _build_serializer(serializer)

        self.address = config.address
        self.port = config.port
        self.error_mode = config.error_mode

    def __del__(self, *, _warn: Callable[..., Any] = warnings.warn) -> None:
        try:
            socket = self.__socket
            closed = self.__closed
        except AttributeError:
            return
        if socket is not None and not closed:
            _warn(f"unclosed client {self!r}", ResourceWarning, source=self)
            self.close()

    def __repr__(self) -> str:
        try:
            return (
                f"<{self.__class__.__name__} address={self.__address!r} port={self.__port} error_mode={self.__error_mode.name}>"
            )
        except AttributeError:
            return f"<{self.__class__.__name__} (partially initialized)>"

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def is_closed(self) -> bool:
        """
        Checks if the client is in a closed state.

        Returns:
            the client state.
        """
        return self.__closed

    def close(self) -> None:
        """
        Close the client and release the socket, if it has been created.

        Once that happens, :meth:`send` fails with a :exc:`.ClientClosedError`.

        Can be safely called multiple times.
        """
        self.__closed = True
        socket, self.__socket = self.__socket, None
        if socket is not None:
            socket.close()

    def send(self, message: Any = _MISSING, /) -> bool:
        """
        Encodes `message` with the active serializer and sends it to (:attr:`address`, :attr:`port`).

        :data:`None`, empty strings and other falsy values are valid messages; only a call without argument is an error.

        Under :attr:`ErrorMode.REPORT`, every failure makes this method return :data:`False`,
        and transmission errors are also logged as warnings.

        Parameters:
            message: the Python object to send.

        Raises:
            InvocationError: `message` is missing. (:attr:`ErrorMode.THROW` only)
            EncodingError: the serializer failed, or did not return a bytes-like object.
                           Nothing has been sent. (:attr:`ErrorMode.THROW` only)
            TransmissionError: the datagram was not entirely sent. (:attr:`ErrorMode.THROW` only)
            ClientClosedError: the client is closed. (:attr:`ErrorMode.THROW` only)

        Returns:
            :data:`True` if the whole datagram has been handed to the operating system.
        """
        throw = self.__error_mode is ErrorMode.THROW

        if message is _MISSING:
            if throw:
                raise InvocationError("Please specify message")
            return False

        try:
            data = self.__serializer.serialize(message)
            if isinstance(data, (bytearray, memoryview)):
                data = bytes(data)
            elif not isinstance(data, bytes):
                raise TypeError(f"serializer returned a {type(data).__name__} object, not bytes")
        except Exception as exc:
            if throw:
                raise EncodingError(f"Couldn't serialize message: {exc}", error_info={"message": message}) from exc
            return False

        if self.__closed:
            return self.__transmission_failed(ClientClosedError("Closed client", nbytes_expected=len(data)), cause=None)

        address, port = self.__address, self.__port
        try:
            nbytes_sent = self.__sendto(data, address, port)
        except OSError as exc:
            error = TransmissionError(
                f"Couldn't send message to {address}:{port}: {exc}",
                errno=exc.errno,
                nbytes_expected=len(data),
            )
            return self.__transmission_failed(error, cause=exc)

        if nbytes_sent != len(data):
            error = TransmissionError(
                f"Couldn't send message to {address}:{port}: {nbytes_sent} bytes sent out of {len(data)}",
                nbytes_sent=nbytes_sent,
                nbytes_expected=len(data),
            )
            return self.__transmission_failed(error, cause=None)

        self.__logger.debug("Sent %d bytes to %s:%d", nbytes_sent, address, port)
        return True

    def serialize(self, message: Any) -> bytes:
        """
        Encodes `message` with the active serializer. The error policy does not apply.

        Parameters:
            message: the Python object to serialize.

        Returns:
            a byte sequence.
        """
        return self.__serializer.serialize(message)

    def deserialize(self, data: bytes) -> Any:
        """
        Decodes `data` with the active serializer. The error policy does not apply.

        Parameters:
            data: a byte sequence produced by :meth:`serialize`.

        Raises:
            DeserializeError: Invalid data.

        Returns:
            the deserialized Python object.
        """
        return self.__serializer.deserialize(data)

    def __sendto(self, data: bytes, address: str, port: int) -> int:
        socket = self.__socket
        if socket is None:
            family = self.__family
        elif self.__dualstack:
            family = _socket.AF_UNSPEC
        else:
            family = socket.family
        resolved_family, sockaddr = _utils.resolve_datagram_address(address, port, family)
        if socket is None:
            self.__socket = socket = self.__open_socket(resolved_family)
        if self.__dualstack and resolved_family == _socket.AF_INET:
            sockaddr = _utils.ipv4_mapped_sockaddr(sockaddr)
        return socket.sendto(data, sockaddr)

    def __open_socket(self, family: int) -> _socket.socket:
        # An explicit family keeps the socket bound to it
        if self.__family == _socket.AF_UNSPEC and _socket.has_dualstack_ipv6():
            socket = _utils.open_dualstack_datagram_socket()
            self.__dualstack = True
            return socket
        return _socket.socket(family, _socket.SOCK_DGRAM)

    def __transmission_failed(self, error: TransmissionError, *, cause: OSError | None) -> bool:
        if self.__error_mode is ErrorMode.THROW:
            raise error from cause
        self.__logger.warning("%s", error, exc_info=cause)
        return False

    @property
    def address(self) -> str:
        """IP address or hostname of the listening server. Used by the next :meth:`send` call."""
        return self.__address

    @address.setter
    def address(self, value: str) -> None:
        if not isinstance(value, str):
            raise TypeError(f"Expected a str address, got {value!r}")
        self.__address = value

    @property
    def port(self) -> int:
        """UDP port of the listening server. Used by the next :meth:`send` call."""
        return self.__port

    @port.setter
    def port(self, value: int) -> None:
        _utils.check_port(value)
        self.__port = value

    @property
    def error_mode(self) -> ErrorMode:
        """The error policy. Accepts an :class:`ErrorMode` member or its value (``"report"`` or ``"throw"``)."""
        return self.__error_mode

    @error_mode.setter
    def error_mode(self, value: ErrorMode | str) -> None:
        self.__error_mode = ErrorMode(value)

    @property
    def throws_exception(self) -> bool:
        """Shorthand for ``error_mode is ErrorMode.THROW``."""
        return self.__error_mode is ErrorMode.THROW

    @throws_exception.setter
    def throws_exception(self, value: bool) -> None:
        self.__error_mode = ErrorMode.THROW if value else ErrorMode.REPORT

    @property
    def serializer(self) -> AbstractPacketSerializer[Any, Any]:
        """The active :term:`serializer`. Accepts the same values as the ``serializer`` constructor parameter."""
        return self.__serializer

    @serializer.setter
    def serializer(self, value: AnySerializer) -> None:
        self.__serializer = _build_serializer(value)

    @property
    def config(self) -> ClientConfig:
        """A snapshot of the current configuration. Read-only attribute."""
        return ClientConfig(address=self.__address, port=self.__port, error_mode=self.__error_mode, family=self.__family)

    @property
    def socket(self) -> _socket.socket:
        """
        The UDP socket used to send the messages. Read-only attribute.

        The socket is created on first access, and is kept until :meth:`close`.

        Raises:
            ClientClosedError: the client is closed.
        """
        if self.__closed:
            raise ClientClosedError("Closed client")
        if (socket := self.__socket) is None:
            family = self.__family if self.__family != _socket.AF_UNSPEC else _socket.AF_INET
            self.__socket = socket = self.__open_socket(family)
        return socket


def _build_serializer(serializer: AnySerializer | None) -> AbstractPacketSerializer[Any, Any]:
    match serializer:
        case None:
            return PickleSerializer()
        case AbstractPacketSerializer():
            return serializer
        case str(name):
            return lookup_serializer(name)
        case _ if callable(getattr(serializer, "serialize", None)):
            return CallbackSerializer(getattr(serializer, "serialize"), getattr(serializer, "deserialize", None))
        case _ if callable(serializer):
            return CallbackSerializer(serializer)
        case _:
            raise TypeError(f"Invalid serializer: {serializer!r}")
