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
"""CBOR log message serializer module.

Needs the ``cbor`` extra::

    pip install "logudp[cbor]"
"""

from __future__ import annotations

__all__ = [
    "CBORDecoderConfig",
    "CBOREncoderConfig",
    "CBORSerializer",
]

from collections.abc import Callable
from dataclasses import asdict as dataclass_asdict, dataclass
from functools import partial
from io import BytesIO
from typing import IO, TYPE_CHECKING, Any, final

from .. import _utils
from .base import BaseSerializer

if TYPE_CHECKING:
    import datetime

    import cbor2


@dataclass(kw_only=True)
class CBOREncoderConfig:
    """
    Options given to :class:`cbor2.CBOREncoder`.
    """

    datetime_as_timestamp: bool = False
    timezone: datetime.tzinfo | None = None
    value_sharing: bool = False
    default: Callable[..., Any] | None = None
    canonical: bool = False
    date_as_datetime: bool = False
    string_referencing: bool = False


@dataclass(kw_only=True)
class CBORDecoderConfig:
    """
    Options given to :class:`cbor2.CBORDecoder`.
    """

    object_hook: Callable[..., Any] | None = None
    tag_hook: Callable[..., Any] | None = None
    str_errors: str = "strict"


class CBORSerializer(BaseSerializer):
    """
    Encodes log messages in the `CBOR <https://cbor.io>`_ binary format, using :mod:`cbor2`.
    """

    __slots__ = ("__new_encoder", "__new_decoder", "__decode_error_cls")

    def __init__(
        self,
        encoder_config: CBOREncoderConfig | None = None,
        decoder_config: CBORDecoderConfig | None = None,
        *,
        debug: bool = False,
    ) -> None:
        """
        Parameters:
            encoder_config: Options for the :class:`~cbor2.CBOREncoder`.
            decoder_config: Options for the :class:`~cbor2.CBORDecoder`.
            debug: Attach the faulty datagram to :exc:`.DeserializeError` instances.

        Raises:
            ModuleNotFoundError: ``cbor2`` is not installed.
        """
        try:
            import cbor2
        except ModuleNotFoundError as exc:
            raise _utils.missing_extra_deps("cbor") from exc

        super().__init__(debug=debug)

        encoder_config = _utils.config_or_default(encoder_config, CBOREncoderConfig, "encoder")
        decoder_config = _utils.config_or_default(decoder_config, CBORDecoderConfig, "decoder")

        self.__new_encoder: Callable[[IO[bytes]], cbor2.CBOREncoder] = partial(cbor2.CBOREncoder, **dataclass_asdict(encoder_config))
        self.__new_decoder: Callable[[IO[bytes]], cbor2.CBORDecoder] = partial(cbor2.CBORDecoder, **dataclass_asdict(decoder_config))
        self.__decode_error_cls: tuple[type[Exception], ...] = (cbor2.CBORDecodeError, UnicodeError)

    @final
    def serialize(self, message: Any) -> bytes:
        """
        Encodes `message` to CBOR.

        Raises:
            cbor2.CBOREncodeError: `message` holds an object with no CBOR representation.
        """
        with BytesIO() as buffer:
            self.__new_encoder(buffer).encode(message)
            return buffer.getvalue()

    @final
    def deserialize(self, data: bytes) -> Any:
        """
        Decodes exactly one CBOR item from `data`.

        Raises:
            DeserializeError: truncated, invalid, or followed by extra data.
        """
        with BytesIO(data) as buffer:
            try:
                message = self.__new_decoder(buffer).decode()
            except self.__decode_error_cls as exc:
                raise self._decode_error(str(exc) or "Invalid token", data=data) from exc
            self._check_no_extra_data(message, buffer.read())
        return message
