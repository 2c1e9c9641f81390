"""Compiled unit implementations backed by package data, zip archives, or memory."""

from __future__ import annotations

import io
import logging
import zipfile
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from importlib.resources import files
from types import ModuleType
from typing import IO, TYPE_CHECKING

from embedded_resources.exceptions import InvalidContainerError, ResourceNotFoundError

if TYPE_CHECKING:
    from importlib.resources.abc import Traversable

logger = logging.getLogger(__name__)

# Python sources and bytecode are code, not resources
_MODULE_SUFFIXES = (".py", ".pyc", ".pyo")


class MappingUnit:
    """Compiled unit over an in-memory map of resource names to bytes.

    Suited to resources bundled into a generated module at build time.
    The listing follows the mapping's insertion order.
    """

    def __init__(self, name: str, resources: Mapping[str, bytes | str]) -> None:
        """Initialize mapping unit.

        Args:
            name: Unit identity used in descriptors and error messages.
            resources: Mapping of resource name to content. String content is
                stored as UTF-8 bytes.
        """
        self.name = name
        self._resources = {
            key: value.encode("utf-8") if isinstance(value, str) else bytes(value)
            for key, value in resources.items()
        }

    def list_resource_names(self) -> list[str]:
        """List resource names in insertion order."""
        return list(self._resources)

    def open_resource(self, name: str) -> IO[bytes]:
        """Open a resource as a fresh in-memory stream."""
        try:
            return io.BytesIO(self._resources[name])
        except KeyError:
            raise ResourceNotFoundError(self.name, name) from None

    def __repr__(self) -> str:
        return f"MappingUnit({self.name!r}, {len(self._resources)} resources)"


class PackageUnit:
    """Compiled unit over the data files of an importable package.

    Only the flat top-level listing of the package (or of one of its
    subdirectories) is exposed. Directories are skipped.
    """

    def __init__(
        self,
        package: str | ModuleType,
        subdirectory: str | None = None,
    ) -> None:
        """Initialize package unit.

        Args:
            package: Package name (e.g., "myapp.templates") or imported package module.
            subdirectory: Optional directory inside the package holding the resources.
        """
        self._package = package
        self._subdirectory = subdirectory
        package_name = package if isinstance(package, str) else package.__name__
        self.name = (
            f"{package_name}/{subdirectory}" if subdirectory else package_name
        )

    def _root(self) -> Traversable:
        """Resolve the resource directory of the package.

        Raises:
            InvalidContainerError: If the package cannot be imported or the
                directory does not exist.
        """
        try:
            root = files(self._package)
        except (ImportError, TypeError) as e:
            raise InvalidContainerError(self.name, str(e)) from e

        if self._subdirectory:
            root = root / self._subdirectory
        if not root.is_dir():
            raise InvalidContainerError(self.name, "resource directory does not exist")
        return root

    def list_resource_names(self) -> list[str]:
        """List resource file names, sorted for a stable order."""
        root = self._root()
        try:
            return sorted(
                entry.name
                for entry in root.iterdir()
                if entry.is_file() and not entry.name.endswith(_MODULE_SUFFIXES)
            )
        except OSError as e:
            raise InvalidContainerError(self.name, str(e)) from e

    def open_resource(self, name: str) -> IO[bytes]:
        """Open a top-level data file of the package for binary reading."""
        if not name or "/" in name:
            raise ResourceNotFoundError(self.name, name)
        resource = self._root() / name
        if not resource.is_file():
            raise ResourceNotFoundError(self.name, name)
        return resource.open("rb")

    def __repr__(self) -> str:
        return f"PackageUnit({self.name!r})"


class ZippedUnit:
    """Compiled unit over a zip archive stored inside a package.

    The archive is opened lazily on every listing or read; nothing is
    cached between calls. Entry names are used verbatim as flat resource
    names (e.g., "outlined/icon.svg").
    """

    def __init__(
        self,
        package_name: str,
        archive_name: str = "resources.zip",
        name: str | None = None,
    ) -> None:
        """Initialize zipped unit.

        Args:
            package_name: Python package containing the zip (e.g., "myapp_assets").
            archive_name: Name of the zip file within the package.
            name: Optional unit identity. Defaults to "package_name/archive_name".
        """
        self._package_name = package_name
        self._archive_name = archive_name
        self.name = name or f"{package_name}/{archive_name}"

    @contextmanager
    def _open_zip(self) -> Iterator[zipfile.ZipFile]:
        """Context manager for opening the zip file.

        Yields:
            ZipFile instance for reading resources.

        Raises:
            InvalidContainerError: If the archive is missing or corrupt.
        """
        try:
            zip_path = files(self._package_name) / self._archive_name
            handle = zip_path.open("rb")
        except (ImportError, TypeError, OSError) as e:
            raise InvalidContainerError(self.name, str(e)) from e

        with handle:
            try:
                with zipfile.ZipFile(handle, "r") as zip_file:
                    yield zip_file
            except zipfile.BadZipFile as e:
                raise InvalidContainerError(self.name, str(e)) from e

    def list_resource_names(self) -> list[str]:
        """List file entries in archive order (directory entries skipped)."""
        with self._open_zip() as zip_file:
            return [name for name in zip_file.namelist() if not name.endswith("/")]

    def open_resource(self, name: str) -> IO[bytes]:
        """Open a resource as an independent in-memory stream."""
        with self._open_zip() as zip_file:
            try:
                data = zip_file.read(name)
            except KeyError:
                logger.debug("Entry %r missing from archive %s", name, self.name)
                raise ResourceNotFoundError(self.name, name) from None
        return io.BytesIO(data)

    def __repr__(self) -> str:
        return f"ZippedUnit({self.name!r})"
