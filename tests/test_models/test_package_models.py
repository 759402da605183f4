"""Unit tests for depregistry.models.package."""

from __future__ import annotations

import pytest

from conftest import make_package, make_version
from depregistry.models import Require, VersionInterval, VersionNumber, sort_names

V = VersionNumber


@pytest.mark.unit
class TestRequire:
    """Tests for Require."""

    def test_default_is_unconstrained(self) -> None:
        require = Require()

        assert require.is_satisfied_by(V(0, 0, 1))
        assert require.systems == frozenset()

    def test_combine_intersects_and_unions(self) -> None:
        first = Require(VersionInterval(V(0, 2)), frozenset({"osx"}))
        second = Require(VersionInterval(V(0, 1), V(0, 4)), frozenset({"linux"}))

        combined = first.combine(second)

        assert combined.versions == VersionInterval(V(0, 2), V(0, 4))
        assert combined.systems == frozenset({"osx", "linux"})

    def test_is_satisfied_by(self) -> None:
        require = Require(VersionInterval(V(1, 0), V(2, 0)))

        assert require.is_satisfied_by(V(1, 9, 9))
        assert not require.is_satisfied_by(V(2, 0))


@pytest.mark.unit
class TestPackage:
    """Tests for Package."""

    def test_sorted_versions(self) -> None:
        package = make_package(
            "Pkg",
            {
                V(0, 10, 0): make_version(sha1="c"),
                V(0, 2, 0): make_version(sha1="a"),
                V(0, 9, 0): make_version(sha1="b"),
            },
        )

        assert [(str(n), v.sha1) for n, v in package.sorted_versions()] == [
            ("0.2.0", "a"),
            ("0.9.0", "b"),
            ("0.10.0", "c"),
        ]

    def test_dependency_names(self) -> None:
        package = make_package(
            "Pkg",
            {
                V(0, 1, 0): make_version(requires={"A": Require()}),
                V(0, 2, 0): make_version(requires={"A": Require(), "B": Require()}),
            },
        )

        assert package.dependency_names() == {"A", "B"}


@pytest.mark.unit
class TestSortNames:
    """Tests for sort_names."""

    def test_case_insensitive(self) -> None:
        assert sort_names(["zlib", "Alpha", "beta"]) == ["Alpha", "beta", "zlib"]

    def test_ties_broken_by_exact_name(self) -> None:
        assert sort_names(["abc", "ABC", "Abc"]) == ["ABC", "Abc", "abc"]
