# mypy: disable-error-code=override

from __future__ import annotations

from typing import Any, final

from logudp.serializers.msgpack import MessagePackSerializer

import pytest

from .base import BaseTestSerializerExtraData
from .samples.json import SAMPLES


@final
@pytest.mark.feature_msgpack
class TestMessagePackSerializer(BaseTestSerializerExtraData):
    #### Serializers

    @pytest.fixture(scope="class")
    @staticmethod
    def serializer_for_serialization() -> MessagePackSerializer:
        return MessagePackSerializer()

    @pytest.fixture(scope="class")
    @staticmethod
    def serializer_for_deserialization() -> MessagePackSerializer:
        return MessagePackSerializer()

    #### Packets to test

    @pytest.fixture(scope="class", params=[pytest.param(p, id=f"message: {id}") for p, id in SAMPLES])
    @staticmethod
    def message_to_serialize(request: Any) -> Any:
        return request.param

    #### One-shot Serialize

    @pytest.fixture(scope="class")
    @staticmethod
    def expected_complete_data(message_to_serialize: Any) -> bytes:
        import msgpack

        return msgpack.packb(message_to_serialize)

    #### One-shot Deserialize

    @pytest.fixture(scope="class")
    @staticmethod
    def invalid_complete_data() -> bytes:
        return b"\xc1"

    @pytest.fixture(scope="class")
    @staticmethod
    def truncated_complete_data() -> bytes:
        import msgpack

        return msgpack.packb({"message": "Hi"})[:-1]

    def test____deserialize____missing_data(
        self,
        serializer_for_deserialization: MessagePackSerializer,
        truncated_complete_data: bytes,
    ) -> None:
        # Arrange
        from logudp.exceptions import DeserializeError

        # Act & Assert
        with pytest.raises(DeserializeError, match=r"^Missing data to create message$"):
            _ = serializer_for_deserialization.deserialize(truncated_complete_data)
