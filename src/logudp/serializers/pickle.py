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
"""Pickle log message serializer module.

This is the default serializer of :class:`.LogUDPClient`: it accepts almost any Python object.

Warning:
    Never unpickle datagrams received from an untrusted network.
"""

from __future__ import annotations

__all__ = [
    "PickleSerializer",
    "PicklerConfig",
    "UnpicklerConfig",
]

import pickle
from collections.abc import Callable
from dataclasses import asdict as dataclass_asdict, dataclass
from io import BytesIO
from typing import Any, final

from .. import _utils
from .base import BaseSerializer


@dataclass(kw_only=True)
class PicklerConfig:
    """
    Options given to :func:`pickle.dumps`.
    """

    protocol: int = pickle.DEFAULT_PROTOCOL
    fix_imports: bool = False


@dataclass(kw_only=True)
class UnpicklerConfig:
    """
    Options given to :class:`pickle.Unpickler`.
    """

    fix_imports: bool = False
    encoding: str = "utf-8"
    errors: str = "strict"


class PickleSerializer(BaseSerializer):
    """
    Encodes log messages with the :mod:`pickle` module.
    """

    __slots__ = ("__pickler_options", "__unpickler_options", "__optimize")

    def __init__(
        self,
        pickler_config: PicklerConfig | None = None,
        unpickler_config: UnpicklerConfig | None = None,
        *,
        pickler_optimize: bool = False,
        debug: bool = False,
    ) -> None:
        """
        Parameters:
            pickler_config: Options for :func:`pickle.dumps`.
            unpickler_config: Options for the :class:`~pickle.Unpickler`.
            pickler_optimize: Shrink the output with :func:`pickletools.optimize`.
            debug: Attach the faulty datagram to :exc:`.DeserializeError` instances.
        """
        super().__init__(debug=debug)

        pickler_config = _utils.config_or_default(pickler_config, PicklerConfig, "pickler")
        unpickler_config = _utils.config_or_default(unpickler_config, UnpicklerConfig, "unpickler")

        self.__pickler_options: dict[str, Any] = dataclass_asdict(pickler_config)
        self.__unpickler_options: dict[str, Any] = dataclass_asdict(unpickler_config)
        self.__optimize: Callable[[bytes], bytes] | None = None
        if pickler_optimize:
            import pickletools

            self.__optimize = pickletools.optimize

    @final
    def serialize(self, message: Any) -> bytes:
        """
        Pickles `message`.

        Raises:
            pickle.PicklingError: `message` cannot be pickled.
        """
        data = pickle.dumps(message, **self.__pickler_options)
        if self.__optimize is not None:
            data = self.__optimize(data)
        return data

    @final
    def deserialize(self, data: bytes) -> Any:
        """
        Unpickles exactly one object from `data`.

        Raises:
            DeserializeError: `data` is not a valid pickle, or there is something after the pickle.
        """
        with BytesIO(data) as buffer:
            try:
                message = pickle.Unpickler(buffer, **self.__unpickler_options).load()
            except Exception as exc:
                raise self._decode_error(str(exc) or "Invalid token", data=data) from exc
            self._check_no_extra_data(message, buffer.read())
        return message
