from __future__ import annotations

from typing import TYPE_CHECKING

from logudp.serializers import SERIALIZER_PRESETS, JSONSerializer, PickleSerializer, lookup_serializer

import pytest

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


class TestSerializerPresets:
    def test____presets____read_only(self) -> None:
        # Arrange

        # Act & Assert
        with pytest.raises(TypeError):
            SERIALIZER_PRESETS["yaml"] = JSONSerializer  # type: ignore[index]

    def test____presets____available_names(self) -> None:
        # Arrange

        # Act & Assert
        assert sorted(SERIALIZER_PRESETS) == ["cbor", "json", "msgpack", "pickle"]

    @pytest.mark.parametrize(
        ["name", "expected_cls"],
        [
            ("json", JSONSerializer),
            ("JSON", JSONSerializer),
            ("pickle", PickleSerializer),
            ("Pickle", PickleSerializer),
        ],
    )
    def test____lookup_serializer____case_insensitive(self, name: str, expected_cls: type) -> None:
        # Arrange

        # Act
        serializer = lookup_serializer(name)

        # Assert
        assert type(serializer) is expected_cls

    def test____lookup_serializer____forward_keyword_arguments(self, mocker: MockerFixture) -> None:
        # Arrange
        mock_factory = mocker.stub(name="factory")
        mocker.patch(f"{lookup_serializer.__module__}.SERIALIZER_PRESETS", {"custom": mock_factory})

        # Act
        serializer = lookup_serializer("custom", debug=True, wrap_key="msg")

        # Assert
        mock_factory.assert_called_once_with(debug=True, wrap_key="msg")
        assert serializer is mock_factory.return_value

    def test____lookup_serializer____unknown_name(self) -> None:
        # Arrange

        # Act & Assert
        with pytest.raises(ValueError, match=r"^Unknown serializer 'yaml'\. Choose one of: cbor, json, msgpack, pickle$"):
            lookup_serializer("yaml")

    @pytest.mark.feature_msgpack
    def test____lookup_serializer____msgpack(self) -> None:
        # Arrange
        from logudp.serializers import MessagePackSerializer

        # Act & Assert
        assert type(lookup_serializer("msgpack")) is MessagePackSerializer

    @pytest.mark.feature_cbor
    def test____lookup_serializer____cbor(self) -> None:
        # Arrange
        from logudp.serializers import CBORSerializer

        # Act & Assert
        assert type(lookup_serializer("cbor")) is CBORSerializer
