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
"""Common ground for the built-in serializers."""

from __future__ import annotations

__all__ = ["BaseSerializer"]

from typing import Any, final

from ..exceptions import DeserializeError
from .abc import AbstractPacketSerializer


class BaseSerializer(AbstractPacketSerializer[Any, Any]):
    """
    Base class of the format-based serializers (JSON, pickle, MessagePack, CBOR).

    In debug mode, the :exc:`.DeserializeError` instances carry the offending data in ``error_info``.
    """

    __slots__ = ("__debug",)

    def __init__(self, *, debug: bool = False) -> None:
        super().__init__()
        self.__debug: bool = bool(debug)

    @final
    def _decode_error(self, msg: str, /, **error_info: Any) -> DeserializeError:
        return DeserializeError(msg, error_info=error_info if self.__debug else None)

    @final
    def _check_no_extra_data(self, message: Any, extra: bytes) -> None:
        if extra:
            raise self._decode_error("Extra data caught", message=message, extra=extra)

    @property
    @final
    def debug(self) -> bool:
        """
        The debug mode flag. Read-only attribute.
        """
        return self.__debug
