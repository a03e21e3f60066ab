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
"""logudp's message serializers module."""

from __future__ import annotations

__all__ = [
    "SERIALIZER_PRESETS",
    "AbstractPacketSerializer",
    "CBORSerializer",
    "CallbackSerializer",
    "JSONSerializer",
    "MessagePackSerializer",
    "PickleSerializer",
    "lookup_serializer",
]

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from .abc import AbstractPacketSerializer
from .callback import CallbackSerializer
from .cbor import CBORSerializer
from .json import JSONSerializer
from .msgpack import MessagePackSerializer
from .pickle import PickleSerializer

SERIALIZER_PRESETS: Mapping[str, Callable[..., AbstractPacketSerializer[Any, Any]]] = MappingProxyType(
    {
        "cbor": CBORSerializer,
        "json": JSONSerializer,
        "msgpack": MessagePackSerializer,
        "pickle": PickleSerializer,
    }
)
"""Built-in serializers, by name."""


def lookup_serializer(name: str, /, **kwargs: Any) -> AbstractPacketSerializer[Any, Any]:
    """
    Instantiates a built-in serializer from its name.

    Example:
        >>> lookup_serializer("json", wrap_key="msg").serialize("Hi")
        b'{"msg":"Hi"}'

    Parameters:
        name: One of the :data:`SERIALIZER_PRESETS` keys. Case-insensitive.
        kwargs: Keyword arguments passed to the serializer constructor.

    Raises:
        ValueError: Unknown serializer name.
        ModuleNotFoundError: The serializer needs an extra which is not installed.

    Returns:
        a new serializer instance.
    """
    try:
        factory = SERIALIZER_PRESETS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown serializer {name!r}. Choose one of: {', '.join(sorted(SERIALIZER_PRESETS))}") from None
    return factory(**kwargs)
