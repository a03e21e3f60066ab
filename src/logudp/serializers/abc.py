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
"""Message serializer base class module."""

from __future__ import annotations

__all__ = [
    "AbstractPacketSerializer",
]

from abc import ABCMeta, abstractmethod
from typing import Generic

from .._typevars import _T_DecodedMessage, _T_Message


class AbstractPacketSerializer(Generic[_T_Message, _T_DecodedMessage], metaclass=ABCMeta):
    """
    The base class for implementing a :term:`serializer`.

    The client only ever calls :meth:`serialize`; :meth:`deserialize` is the inverse operation
    a listening server would use on the received datagram.
    """

    __slots__ = ("__weakref__",)

    @abstractmethod
    def serialize(self, message: _T_Message, /) -> bytes:
        """
        Returns the byte representation of `message`.

        Parameters:
            message: The Python object to serialize.

        Returns:
            a byte sequence.
        """
        raise NotImplementedError

    @abstractmethod
    def deserialize(self, data: bytes, /) -> _T_DecodedMessage:
        """
        Creates a Python object representing the raw message from `data`.

        Parameters:
            data: The byte sequence to deserialize.

        Raises:
            DeserializeError: An unrelated deserialization error occurred.

        Returns:
            the deserialized Python object.
        """
        raise NotImplementedError
