"""Pytest configuration and fixtures."""

from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import IO

import pytest

from embedded_resources.core import ResourceResolver
from embedded_resources.exceptions import InvalidContainerError, ResourceNotFoundError
from embedded_resources.units import MappingUnit


@pytest.fixture
def resolver() -> ResourceResolver:
    """Create a ResourceResolver with the default UTF-8 encoding."""
    return ResourceResolver(encoding="utf-8")


class MockCompiledUnit:
    """Mock CompiledUnit for testing that records every call it receives."""

    def __init__(
        self,
        resources: dict[str, bytes],
        name: str = "test-unit",
        broken: bool = False,
    ) -> None:
        """Initialize mock compiled unit.

        Args:
            resources: Dictionary mapping resource names to content.
            name: Unit identity.
            broken: If True, listing raises InvalidContainerError.
        """
        self.name = name
        self.resources = resources
        self.broken = broken
        self.list_calls = 0
        self.opened: list[str] = []

    def list_resource_names(self) -> list[str]:
        """List all resource names."""
        self.list_calls += 1
        if self.broken:
            raise InvalidContainerError(self.name, "unit is corrupted")
        return list(self.resources)

    def open_resource(self, name: str) -> IO[bytes]:
        """Open a resource stream."""
        if name not in self.resources:
            raise ResourceNotFoundError(self.name, name)
        self.opened.append(name)
        return io.BytesIO(self.resources[name])


@pytest.fixture
def abc_unit() -> MockCompiledUnit:
    """Unit holding a.txt, b.txt and ab.txt, in that order."""
    return MockCompiledUnit(
        {
            "a.txt": b"alpha",
            "b.txt": b"bravo",
            "ab.txt": b"alpha bravo",
        },
        name="abc-unit",
    )


@pytest.fixture
def other_unit() -> MappingUnit:
    """Second unit sharing the name a.txt with abc_unit."""
    return MappingUnit(
        "other-unit",
        {
            "a.txt": "other alpha",
            "README.md": "# Readme",
        },
    )


def create_test_package(
    root: Path,
    package_name: str,
    files: dict[str, bytes] | None = None,
    archive: dict[str, bytes] | None = None,
    archive_name: str = "resources.zip",
) -> Path:
    """Create an importable package with data files under root.

    Args:
        root: Directory to add to sys.path.
        package_name: Name of the package directory.
        files: Data files to write at the package top level.
        archive: Entries of a zip archive to write into the package.
        archive_name: File name of the zip archive.

    Returns:
        Path to the package directory.
    """
    package_dir = root / package_name
    package_dir.mkdir(parents=True)
    (package_dir / "__init__.py").write_text("")

    for name, data in (files or {}).items():
        (package_dir / name).write_bytes(data)

    if archive is not None:
        with zipfile.ZipFile(package_dir / archive_name, "w") as zf:
            for name, data in archive.items():
                zf.writestr(name, data)

    return package_dir
