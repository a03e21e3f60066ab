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
"""Serializer built from plain functions."""

from __future__ import annotations

__all__ = ["CallbackSerializer"]

from collections.abc import Callable
from typing import final

from .. import _utils
from .._typevars import _T_DecodedMessage, _T_Message
from ..exceptions import DeserializeError, UnsupportedOperation
from .abc import AbstractPacketSerializer


@final
class CallbackSerializer(AbstractPacketSerializer[_T_Message, _T_DecodedMessage]):
    """
    A :term:`serializer` which delegates the work to an ``encode`` and an optional ``decode`` function.

    Example:
        >>> import marshal
        >>> s = CallbackSerializer(marshal.dumps, marshal.loads)
        >>> s.deserialize(s.serialize([1, 2, 3]))
        [1, 2, 3]
    """

    __slots__ = ("__encode", "__decode")

    def __init__(
        self,
        encode: Callable[[_T_Message], bytes],
        decode: Callable[[bytes], _T_DecodedMessage] | None = None,
    ) -> None:
        """
        Parameters:
            encode: Function converting a message to a byte sequence.
            decode: Inverse function of `encode`. If :data:`None`, :meth:`deserialize` is not available.
        """
        super().__init__()

        if not callable(encode):
            raise TypeError(f"encode must be a callable, got {encode!r}")
        if decode is not None and not callable(decode):
            raise TypeError(f"decode must be a callable, got {decode!r}")

        self.__encode: Callable[[_T_Message], bytes] = encode
        self.__decode: Callable[[bytes], _T_DecodedMessage] | None = decode

    def __repr__(self) -> str:
        decode_name = _utils.get_callable_name(self.__decode) if self.__decode is not None else None
        return f"<{self.__class__.__name__} encode={_utils.get_callable_name(self.__encode)} decode={decode_name}>"

    def serialize(self, message: _T_Message) -> bytes:
        """
        Calls the ``encode`` function with `message`.

        Parameters:
            message: The Python object to serialize.

        Raises:
            TypeError: ``encode`` did not return a :class:`bytes`-like object.

        Returns:
            a byte sequence.
        """
        data = self.__encode(message)
        if isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
        elif not isinstance(data, bytes):
            raise TypeError(f"{_utils.get_callable_name(self.__encode)}() returned a {type(data).__name__} object, not bytes")
        return data

    def deserialize(self, data: bytes) -> _T_DecodedMessage:
        """
        Calls the ``decode`` function with `data`.

        Parameters:
            data: The byte sequence to deserialize.

        Raises:
            UnsupportedOperation: No ``decode`` function was given.
            DeserializeError: ``decode`` raised an exception.

        Returns:
            the deserialized Python object.
        """
        if (decode := self.__decode) is None:
            raise UnsupportedOperation("This serializer has no decode function")
        try:
            return decode(data)
        except Exception as exc:
            raise DeserializeError(str(exc) or "Invalid token", error_info={"data": data}) from exc
