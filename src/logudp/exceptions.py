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
"""Exceptions definition module.

Here are all the exception classes defined and used by the library.
"""

from __future__ import annotations

__all__ = [
    "ClientClosedError",
    "DeserializeError",
    "EncodingError",
    "InvocationError",
    "TransmissionError",
    "UnsupportedOperation",
]

from typing import Any


class InvocationError(TypeError):
    """Error raised when :meth:`.LogUDPClient.send` is called without a message."""


class EncodingError(Exception):
    """Error raised when the :term:`serializer` could not produce a byte sequence from a message."""

    def __init__(self, message: str, error_info: Any = None) -> None:
        """
        Parameters:
            message: Error message.
            error_info: Additional error data.
        """

        super().__init__(message)

        self.error_info: Any = error_info
        """Additional error data."""


class TransmissionError(Exception):
    """Error raised when the operating system did not transmit the whole datagram."""

    def __init__(
        self,
        message: str,
        *,
        errno: int | None = None,
        nbytes_sent: int = 0,
        nbytes_expected: int = 0,
    ) -> None:
        """
        Parameters:
            message: Error message, usually including the OS error text.
            errno: The OS error number, if the failure comes from a system call.
            nbytes_sent: Number of bytes the system call reported as sent.
            nbytes_expected: Size of the serialized message.
        """

        super().__init__(message)

        self.errno: int | None = errno
        """The OS error number, or :data:`None`."""

        self.nbytes_sent: int = nbytes_sent
        """Number of bytes actually sent."""

        self.nbytes_expected: int = nbytes_expected
        """Number of bytes that should have been sent."""


class ClientClosedError(TransmissionError):
    """Error raised when trying to send a message with a closed client."""


class DeserializeError(Exception):
    """Error raised by a :term:`serializer` if the data format is invalid."""

    def __init__(self, message: str, error_info: Any = None) -> None:
        """
        Parameters:
            message: Error message.
            error_info: Additional error data.
        """

        super().__init__(message)

        self.error_info: Any = error_info
        """Additional error data."""


class UnsupportedOperation(NotImplementedError):
    """
    The requested action is currently unavailable.
    """
