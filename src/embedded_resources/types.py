"""Core type definitions for embedded-resources."""

from __future__ import annotations

import codecs
import enum
import mimetypes
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import IO, Protocol, runtime_checkable

from embedded_resources.exceptions import ResourceDecodeError

DEFAULT_ENCODING = "utf-8"
"""Text encoding used by every string projection unless the resolver overrides it."""

# Byte-order marks override the configured encoding. UTF-32 LE must be
# checked before UTF-16 LE, which is its prefix.
_BYTE_ORDER_MARKS = (
    (codecs.BOM_UTF8, "utf-8"),
    (codecs.BOM_UTF32_LE, "utf-32-le"),
    (codecs.BOM_UTF32_BE, "utf-32-be"),
    (codecs.BOM_UTF16_LE, "utf-16-le"),
    (codecs.BOM_UTF16_BE, "utf-16-be"),
)


def sniff_encoding(data: bytes, encoding: str = DEFAULT_ENCODING) -> tuple[str, int]:
    """Pick the codec for resource bytes, honoring a leading byte-order mark.

    A UTF-8, UTF-16 or UTF-32 byte-order mark selects its codec and is
    skipped; otherwise ``encoding`` is used from the first byte.

    Returns:
        Tuple of (codec name, offset of the first text byte).
    """
    for bom, bom_encoding in _BYTE_ORDER_MARKS:
        if data.startswith(bom):
            return bom_encoding, len(bom)
    return encoding, 0


class DuplicateUnitWarning(UserWarning):
    """Warning emitted when two discovered units share the same name.

    Both units are kept (resolution never de-duplicates), but resource
    descriptors from them become indistinguishable by container name.
    """

    pass


@runtime_checkable
class CompiledUnit(Protocol):
    """Protocol that every source of embedded resources must implement.

    A compiled unit is an immutable bundle of named, read-only resources:
    the data files of an installed package, a zip archive shipped inside
    a package, or a map generated at build time.
    """

    name: str
    """Identity of the unit, used in descriptors and error messages."""

    def list_resource_names(self) -> Iterable[str]:
        """List resource names in the unit's natural order.

        Names are flat; there is no directory nesting.

        Raises:
            InvalidContainerError: If the unit cannot produce a listing.
        """
        ...

    def open_resource(self, name: str) -> IO[bytes]:
        """Open a fresh, independent binary read stream for a resource.

        Args:
            name: Exact resource name as returned by list_resource_names().

        Returns:
            Readable binary stream positioned at the start. The caller owns it.

        Raises:
            ResourceNotFoundError: If no resource has this exact name.
        """
        ...


class Projection(enum.Enum):
    """Output shape requested for matched resources."""

    DESCRIPTOR = "descriptor"
    STRING = "string"
    STREAM = "stream"


@dataclass(frozen=True, slots=True)
class ResourceDescriptor:
    """Metadata about one embedded resource (no content loaded)."""

    name: str
    """Resource name, unique within its unit."""

    container: str
    """Name of the compiled unit this resource belongs to."""

    content_type: str | None = None
    """MIME type guessed from the name, None if unknown."""

    unit: CompiledUnit | None = field(default=None, repr=False, compare=False)
    """Unit used to open the resource."""

    @classmethod
    def for_unit(cls, unit: CompiledUnit, name: str) -> ResourceDescriptor:
        """Build a descriptor for a resource listed by a unit."""
        content_type, _ = mimetypes.guess_type(name, strict=False)
        return cls(
            name=name,
            container=unit.name,
            content_type=content_type,
            unit=unit,
        )

    def open(self) -> IO[bytes]:
        """Open a new read stream over the resource content.

        Each call returns an independent cursor positioned at the start.
        The caller must close it.
        """
        if self.unit is None:
            raise ValueError(f"Descriptor for '{self.name}' is not bound to a unit")
        return self.unit.open_resource(self.name)

    def read_bytes(self) -> bytes:
        """Read the complete resource content."""
        with self.open() as stream:
            return stream.read()

    def read_text(self, encoding: str = DEFAULT_ENCODING) -> str:
        """Read and decode the complete resource content.

        A leading byte-order mark is stripped and overrides ``encoding``.

        Raises:
            ResourceDecodeError: If the bytes are not valid in the codec used.
        """
        data = self.read_bytes()
        codec, start = sniff_encoding(data, encoding)
        try:
            return data[start:].decode(codec)
        except UnicodeDecodeError as e:
            raise ResourceDecodeError(self.container, self.name, codec) from e
