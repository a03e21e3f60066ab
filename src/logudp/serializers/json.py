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
"""JSON log message serializer module."""

from __future__ import annotations

__all__ = [
    "JSONDecoderConfig",
    "JSONEncoderConfig",
    "JSONSerializer",
]

from collections.abc import Callable, Mapping
from dataclasses import asdict as dataclass_asdict, dataclass
from typing import Any, final

from .. import _utils
from .base import BaseSerializer

DEFAULT_WRAP_KEY = "message"


@dataclass(kw_only=True)
class JSONEncoderConfig:
    """
    Options given to :class:`json.JSONEncoder`.

    ``indent`` and ``separators`` are not configurable: a datagram is always encoded in the compact form.
    """

    skipkeys: bool = False
    check_circular: bool = True
    ensure_ascii: bool = True
    allow_nan: bool = True
    default: Callable[..., Any] | None = None


@dataclass(kw_only=True)
class JSONDecoderConfig:
    """
    Options given to :class:`json.JSONDecoder`.
    """

    object_hook: Callable[..., Any] | None = None
    parse_int: Callable[[str], Any] | None = None
    parse_float: Callable[[str], Any] | None = None
    parse_constant: Callable[[str], Any] | None = None
    object_pairs_hook: Callable[[list[tuple[str, Any]]], Any] | None = None
    strict: bool = True


class JSONSerializer(BaseSerializer):
    """
    Encodes log messages as compact JSON documents.

    Log collectors expect a JSON object at the top level, so any message which is not a :class:`~collections.abc.Mapping`
    is put in a one-key object::

        >>> s = JSONSerializer()
        >>> s.serialize("Hi")
        b'{"message":"Hi"}'
        >>> s.serialize({"pid": 42})
        b'{"pid":42}'

    :meth:`deserialize` returns the document as is; the wrapping object is not removed.
    """

    __slots__ = ("__encode", "__decode", "__decode_error_cls", "__encoding", "__unicode_errors", "__wrap_key")

    def __init__(
        self,
        encoder_config: JSONEncoderConfig | None = None,
        decoder_config: JSONDecoderConfig | None = None,
        *,
        encoding: str = "utf-8",
        unicode_errors: str = "strict",
        wrap_key: str | None = DEFAULT_WRAP_KEY,
        debug: bool = False,
    ) -> None:
        """
        Parameters:
            encoder_config: Options for the underlying :class:`~json.JSONEncoder`.
            decoder_config: Options for the underlying :class:`~json.JSONDecoder`.
            encoding: Text encoding of the datagram.
            unicode_errors: Text encoding error handler.
            wrap_key: Name of the key holding non-mapping messages. :data:`None` sends them as bare JSON values.
            debug: Attach the faulty document to :exc:`.DeserializeError` instances.
        """
        from json import JSONDecodeError, JSONDecoder, JSONEncoder

        super().__init__(debug=debug)

        encoder_config = _utils.config_or_default(encoder_config, JSONEncoderConfig, "encoder")
        decoder_config = _utils.config_or_default(decoder_config, JSONDecoderConfig, "decoder")
        if wrap_key is not None and not isinstance(wrap_key, str):
            raise TypeError(f"wrap_key must be a str or None, got {type(wrap_key).__name__}")

        self.__encode: Callable[[Any], str] = JSONEncoder(
            **dataclass_asdict(encoder_config),
            indent=None,
            separators=(",", ":"),
        ).encode
        self.__decode: Callable[[str], Any] = JSONDecoder(**dataclass_asdict(decoder_config)).decode
        self.__decode_error_cls = JSONDecodeError
        self.__encoding: str = encoding
        self.__unicode_errors: str = unicode_errors
        self.__wrap_key: str | None = wrap_key

    @final
    def serialize(self, message: Any) -> bytes:
        """
        Encodes `message` to JSON, wrapping it first if it is not a mapping.

        Raises:
            TypeError: `message` holds an object the encoder does not know.
            ValueError: circular reference, or forbidden float value.
        """
        if isinstance(message, Mapping):
            if not isinstance(message, dict):
                message = dict(message)
        elif self.__wrap_key is not None:
            message = {self.__wrap_key: message}
        return self.__encode(message).encode(self.__encoding, self.__unicode_errors)

    @final
    def deserialize(self, data: bytes) -> Any:
        """
        Decodes a JSON document.

        Raises:
            DeserializeError: `data` is not valid text, or not a valid JSON document.
        """
        try:
            document = data.decode(self.__encoding, self.__unicode_errors)
        except UnicodeError as exc:
            raise self._decode_error(f"Unicode decode error: {exc}", data=data) from exc
        try:
            return self.__decode(document)
        except self.__decode_error_cls as exc:
            raise self._decode_error(
                f"JSON decode error: {exc}",
                document=exc.doc,
                position=exc.pos,
                lineno=exc.lineno,
                colno=exc.colno,
            ) from exc

    @property
    @final
    def wrap_key(self) -> str | None:
        """
        Name of the key holding non-mapping messages. Read-only attribute.
        """
        return self.__wrap_key
