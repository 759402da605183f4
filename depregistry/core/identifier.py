"""
Deterministic package identifiers.

A package's UUID is derived from its name inside a registry namespace:
SHA-1 over the namespace bytes followed by the UTF-8 name, truncated to
128 bits, with the version nibble set to 5 and the RFC 4122 variant bits
set. The result is the same as :func:`uuid.uuid5`.

Bytes are read in RFC 4122 (big-endian) order. Registries produced by
tools that reinterpret the namespace and digest as little-endian integers
carry different identifiers for the same names; the registry namespace
here is ``5c6fe7ab-...`` where such tools derive ``170b767e-...``.
"""

from __future__ import annotations

import hashlib
from uuid import UUID

from depregistry.constants import DEFAULT_NAMESPACE_DOMAIN

#: RFC 4122 namespace for fully-qualified domain names.
NAMESPACE_DNS = UUID("6ba7b810-9dad-11d1-80b4-00c04fd430c8")


def derive_uuid(namespace: UUID, name: str) -> UUID:
    """Derive a version-5 UUID for ``name`` within ``namespace``.

    Examples:
        >>> str(derive_uuid(NAMESPACE_DNS, "python.org"))
        '886313e1-3b8a-5372-9b90-0c9aee199e5d'
    """
    digest = hashlib.sha1(namespace.bytes + name.encode("utf-8")).digest()
    return UUID(bytes=digest[:16], version=5)


def derive_registry_namespace(domain: str = DEFAULT_NAMESPACE_DOMAIN) -> UUID:
    """Return the namespace package UUIDs are derived in for ``domain``."""
    return derive_uuid(NAMESPACE_DNS, domain)
