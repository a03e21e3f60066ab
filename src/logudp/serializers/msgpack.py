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
"""MessagePack log message serializer module.

Needs the ``msgpack`` extra::

    pip install "logudp[msgpack]"
"""

from __future__ import annotations

__all__ = [
    "MessagePackSerializer",
    "MessagePackerConfig",
    "MessageUnpackerConfig",
]

from collections.abc import Callable
from dataclasses import asdict as dataclass_asdict, dataclass
from functools import partial
from typing import Any, final

from .. import _utils
from .base import BaseSerializer


@dataclass(kw_only=True)
class MessagePackerConfig:
    """
    Options given to :func:`msgpack.packb`.
    """

    default: Callable[[Any], Any] | None = None
    use_single_float: bool = False
    use_bin_type: bool = True
    datetime: bool = False
    strict_types: bool = False
    unicode_errors: str = "strict"


@dataclass(kw_only=True)
class MessageUnpackerConfig:
    """
    Options given to :func:`msgpack.unpackb`.

    ``ext_hook`` defaults to :class:`msgpack.ExtType`.
    """

    raw: bool = False
    use_list: bool = True
    timestamp: int = 0
    strict_map_key: bool = True
    unicode_errors: str = "strict"
    object_hook: Callable[[dict[Any, Any]], Any] | None = None
    object_pairs_hook: Callable[[list[tuple[Any, Any]]], Any] | None = None
    ext_hook: Callable[[int, bytes], Any] | None = None


class MessagePackSerializer(BaseSerializer):
    """
    Encodes log messages in the `MessagePack <https://msgpack.org/>`_ binary format.
    """

    __slots__ = ("__packb", "__unpackb", "__extra_data_cls")

    def __init__(
        self,
        packer_config: MessagePackerConfig | None = None,
        unpacker_config: MessageUnpackerConfig | None = None,
        *,
        debug: bool = False,
    ) -> None:
        """
        Parameters:
            packer_config: Options for :func:`msgpack.packb`.
            unpacker_config: Options for :func:`msgpack.unpackb`.
            debug: Attach the faulty datagram to :exc:`.DeserializeError` instances.

        Raises:
            ModuleNotFoundError: ``msgpack`` is not installed.
        """
        try:
            import msgpack
        except ModuleNotFoundError as exc:
            raise _utils.missing_extra_deps("msgpack", feature_name="message-pack") from exc

        super().__init__(debug=debug)

        packer_options = dataclass_asdict(_utils.config_or_default(packer_config, MessagePackerConfig, "packer"))
        unpacker_options = dataclass_asdict(_utils.config_or_default(unpacker_config, MessageUnpackerConfig, "unpacker"))
        if unpacker_options["ext_hook"] is None:
            unpacker_options["ext_hook"] = msgpack.ExtType

        self.__packb: Callable[[Any], bytes] = partial(msgpack.packb, **packer_options, autoreset=True)
        self.__unpackb: Callable[[bytes], Any] = partial(msgpack.unpackb, **unpacker_options)
        self.__extra_data_cls: type[Exception] = msgpack.ExtraData

    @final
    def serialize(self, message: Any) -> bytes:
        """
        Packs `message`.

        Raises:
            TypeError: `message` holds an object with no MessagePack representation.
        """
        return self.__packb(message)

    @final
    def deserialize(self, data: bytes) -> Any:
        """
        Unpacks exactly one object from `data`.

        Raises:
            DeserializeError: truncated, invalid, or followed by extra data.
        """
        try:
            return self.__unpackb(data)
        except self.__extra_data_cls as exc:
            raise self._decode_error("Extra data caught", message=exc.unpacked, extra=exc.extra) from exc  # type: ignore[attr-defined]
        except Exception as exc:
            # unpackb() does not document which exceptions it raises
            msg = str(exc) or "Invalid token"
            if isinstance(exc, ValueError) and "incomplete input" in msg:
                msg = "Missing data to create message"
            raise self._decode_error(msg, data=data) from exc
