"""Unit tests for depregistry.core.identifier."""

from __future__ import annotations

import uuid

import pytest

from depregistry.core.identifier import (
    NAMESPACE_DNS,
    derive_registry_namespace,
    derive_uuid,
)


@pytest.mark.unit
class TestDeriveUuid:
    """Tests for derive_uuid."""

    def test_matches_standard_uuid5(self) -> None:
        """The derivation is the standard name-based SHA-1 UUID."""
        assert derive_uuid(NAMESPACE_DNS, "python.org") == uuid.uuid5(
            uuid.NAMESPACE_DNS, "python.org"
        )

    def test_known_value(self) -> None:
        assert str(derive_uuid(NAMESPACE_DNS, "python.org")) == (
            "886313e1-3b8a-5372-9b90-0c9aee199e5d"
        )

    def test_version_and_variant_bits(self) -> None:
        derived = derive_uuid(NAMESPACE_DNS, "Example")

        assert derived.version == 5
        assert derived.variant == uuid.RFC_4122

    def test_deterministic(self) -> None:
        namespace = derive_registry_namespace()

        assert derive_uuid(namespace, "Example") == derive_uuid(namespace, "Example")

    def test_distinct_names_differ(self) -> None:
        namespace = derive_registry_namespace()

        assert derive_uuid(namespace, "Example") != derive_uuid(namespace, "example")

    def test_unicode_names_are_encoded_as_utf8(self) -> None:
        assert derive_uuid(NAMESPACE_DNS, "Düsseldorf") == uuid.uuid5(
            uuid.NAMESPACE_DNS, "Düsseldorf"
        )


@pytest.mark.unit
class TestDeriveRegistryNamespace:
    """Tests for derive_registry_namespace."""

    def test_default_domain(self) -> None:
        assert derive_registry_namespace() == uuid.uuid5(
            uuid.NAMESPACE_DNS, "julialang.org"
        )

    def test_default_namespace_uses_big_endian_layout(self) -> None:
        """The namespace follows RFC 4122 byte order, not a little-endian reading."""
        namespace = derive_registry_namespace()

        assert str(namespace).startswith("5c6fe7ab-")
        assert not str(namespace).startswith("170b767e-")

    def test_known_package_identifier(self) -> None:
        assert str(derive_uuid(derive_registry_namespace(), "Example")) == (
            "148144aa-62c4-564b-a36c-3219792cc9f9"
        )

    def test_custom_domain(self) -> None:
        assert derive_registry_namespace("example.com") == uuid.uuid5(
            uuid.NAMESPACE_DNS, "example.com"
        )
