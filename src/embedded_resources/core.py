"""Resource resolver for listing, filtering and reading embedded resources."""

from __future__ import annotations

import codecs
import logging
import os
import re
from collections.abc import Iterable
from types import ModuleType
from typing import IO, Any, Union

from embedded_resources.exceptions import (
    EmbeddedResourceError,
    InvalidContainerError,
    ResourceNotFoundError,
)
from embedded_resources.selectors import (
    ALL,
    NameContains,
    NameIn,
    NameMatchesRegex,
    Selector,
)
from embedded_resources.types import (
    DEFAULT_ENCODING,
    CompiledUnit,
    Projection,
    ResourceDescriptor,
)
from embedded_resources.units import PackageUnit

logger = logging.getLogger(__name__)

UnitLike = Union[CompiledUnit, str, ModuleType]
"""A compiled unit, or a package name/module turned into a PackageUnit per call."""

Units = Union[UnitLike, Iterable[UnitLike]]


def _coerce_unit(unit: Any) -> CompiledUnit:
    """Turn a unit-like value into a CompiledUnit.

    Raises:
        InvalidContainerError: If the value cannot act as a compiled unit.
    """
    if isinstance(unit, (str, ModuleType)):
        return PackageUnit(unit)
    if isinstance(unit, CompiledUnit):
        return unit
    raise InvalidContainerError(
        repr(unit),
        "object does not provide name, list_resource_names() and open_resource()",
    )


def _coerce_units(units: Any) -> list[CompiledUnit]:
    """Normalize a single unit or an iterable of units into a list, keeping order."""
    if isinstance(units, (str, ModuleType)) or isinstance(units, CompiledUnit):
        return [_coerce_unit(units)]
    try:
        items = list(units)
    except TypeError:
        raise InvalidContainerError(
            repr(units), "expected a compiled unit or an iterable of units"
        ) from None
    return [_coerce_unit(item) for item in items]


class ResourceResolver:
    """Resolver turning (units, selector, projection) into an ordered result list.

    The resolver holds no state besides its text encoding: every call builds
    a fresh view over the units it receives, lists them, filters the names
    with a selector and projects each match to a descriptor, decoded text or
    an open binary stream. Results follow unit order, then each unit's
    listing order. Nothing is cached or de-duplicated.
    """

    def __init__(self, encoding: str | None = None) -> None:
        """Initialize resource resolver.

        Args:
            encoding: Text encoding for string projections. Can also be set via
                the EMBEDDED_RESOURCES_ENCODING environment variable. Defaults
                to DEFAULT_ENCODING (UTF-8).

        Raises:
            LookupError: If the encoding is not a known text codec.
        """
        self.encoding = self._parse_encoding(encoding)

    def _parse_encoding(self, encoding: str | None) -> str:
        """Parse encoding from constructor and environment variable.

        Args:
            encoding: Encoding from constructor.

        Returns:
            Normalized codec name.

        Raises:
            LookupError: If the codec is unknown or not a text encoding
                (e.g., "rot13" or "hex").
        """
        # Constructor takes precedence over env var
        if encoding is None:
            encoding = (
                os.environ.get("EMBEDDED_RESOURCES_ENCODING", "").strip()
                or DEFAULT_ENCODING
            )
        codec_info = codecs.lookup(encoding)
        # Bytes-to-bytes and str-to-str codecs cannot decode resource content
        if not getattr(codec_info, "_is_text_encoding", True):
            raise LookupError(f"'{codec_info.name}' is not a text encoding")
        return codec_info.name

    def _list_names(self, unit: CompiledUnit) -> list[str]:
        """Get the flat resource listing of a unit.

        Raises:
            InvalidContainerError: If the unit cannot produce a listing.
        """
        try:
            return list(unit.list_resource_names())
        except EmbeddedResourceError:
            raise
        except OSError as e:
            raise InvalidContainerError(unit.name, str(e)) from e

    def descriptors(
        self, units: Units, selector: Selector = ALL
    ) -> list[ResourceDescriptor]:
        """Select resource descriptors from one or more units.

        Args:
            units: A compiled unit, package name or module, or an iterable of them.
            selector: Name selector applied to each unit's listing.

        Returns:
            Matching descriptors in unit order, then listing order.

        Raises:
            InvalidContainerError: If a unit cannot produce a listing.
        """
        results: list[ResourceDescriptor] = []
        for unit in _coerce_units(units):
            names = self._list_names(unit)
            selected = selector.select(names)
            logger.debug(
                "Selected %d of %d resources from %s with %r",
                len(selected),
                len(names),
                unit.name,
                selector,
            )
            results.extend(ResourceDescriptor.for_unit(unit, name) for name in selected)
        return results

    def resolve(
        self,
        units: Units,
        selector: Selector = ALL,
        projection: Projection = Projection.DESCRIPTOR,
    ) -> list[Any]:
        """Run the full select-then-project pipeline.

        Args:
            units: A compiled unit, package name or module, or an iterable of them.
            selector: Name selector applied to each unit's listing.
            projection: Output shape for each match.

        Returns:
            List of descriptors, decoded strings, or open binary streams.

        Raises:
            InvalidContainerError: If a unit cannot produce a listing.
            ResourceDecodeError: If a string projection meets undecodable bytes.
        """
        matches = self.descriptors(units, selector)

        if projection is Projection.DESCRIPTOR:
            return matches
        if projection is Projection.STRING:
            return [descriptor.read_text(self.encoding) for descriptor in matches]
        if projection is Projection.STREAM:
            return self._open_all(matches)
        raise ValueError(f"Unknown projection: {projection!r}")

    def _open_all(self, matches: list[ResourceDescriptor]) -> list[IO[bytes]]:
        """Open a stream per descriptor; close the opened ones if any open fails."""
        streams: list[IO[bytes]] = []
        try:
            for descriptor in matches:
                streams.append(descriptor.open())
        except Exception:
            for stream in streams:
                stream.close()
            raise
        return streams

    def list_all(self, units: Units) -> list[ResourceDescriptor]:
        """List every resource of every unit, without filtering."""
        return self.resolve(units, ALL)

    def list_all_as_string(self, units: Units) -> list[str]:
        """List every resource of every unit, decoded as text."""
        return self.resolve(units, ALL, Projection.STRING)

    def list_all_as_stream(self, units: Units) -> list[IO[bytes]]:
        """Open every resource of every unit; the caller closes the streams."""
        return self.resolve(units, ALL, Projection.STREAM)

    def find_by_name(
        self, units: Units, name: str | None, ignore_case: bool = False
    ) -> list[ResourceDescriptor]:
        """Find resources whose name contains a substring.

        An empty or None name matches every resource, so
        ``find_by_name(units, "")`` equals ``list_all(units)``.

        Args:
            units: A compiled unit, package name or module, or an iterable of them.
            name: Substring to look for in resource names.
            ignore_case: Compare case-insensitively.

        Returns:
            Matching descriptors; empty list when nothing matches.
        """
        return self.resolve(units, NameContains(name, ignore_case))

    def find_by_name_as_string(
        self, units: Units, name: str | None, ignore_case: bool = False
    ) -> list[str]:
        """Find resources by name substring and decode each as text."""
        return self.resolve(units, NameContains(name, ignore_case), Projection.STRING)

    def find_by_name_as_stream(
        self, units: Units, name: str | None, ignore_case: bool = False
    ) -> list[IO[bytes]]:
        """Find resources by name substring as open binary streams."""
        return self.resolve(units, NameContains(name, ignore_case), Projection.STREAM)

    def find_by_names(
        self, units: Units, names: Iterable[str | None], ignore_case: bool = False
    ) -> list[ResourceDescriptor]:
        """Find resources matching any of several name substrings.

        Each name is applied like find_by_name and the per-name results are
        concatenated without de-duplication. Unlike find_by_name with an
        empty string, an empty ``names`` list matches nothing.

        Raises:
            TypeError: If ``names`` is a single string.
        """
        return self.resolve(units, NameIn(names, ignore_case))

    def find_by_names_as_string(
        self, units: Units, names: Iterable[str | None], ignore_case: bool = False
    ) -> list[str]:
        """Find resources by several name substrings and decode each as text."""
        return self.resolve(units, NameIn(names, ignore_case), Projection.STRING)

    def find_by_names_as_stream(
        self, units: Units, names: Iterable[str | None], ignore_case: bool = False
    ) -> list[IO[bytes]]:
        """Find resources by several name substrings as open binary streams."""
        return self.resolve(units, NameIn(names, ignore_case), Projection.STREAM)

    def find_by_regex(
        self, units: Units, pattern: str | re.Pattern[str]
    ) -> list[ResourceDescriptor]:
        """Find resources whose name contains a match of a regular expression.

        The pattern is searched anywhere in the name; anchor it to require
        a whole-name match.

        Raises:
            re.error: If ``pattern`` is a string that does not compile.
        """
        return self.resolve(units, NameMatchesRegex(pattern))

    def find_by_regex_as_string(
        self, units: Units, pattern: str | re.Pattern[str]
    ) -> list[str]:
        """Find resources by regular expression and decode each as text."""
        return self.resolve(units, NameMatchesRegex(pattern), Projection.STRING)

    def find_by_regex_as_stream(
        self, units: Units, pattern: str | re.Pattern[str]
    ) -> list[IO[bytes]]:
        """Find resources by regular expression as open binary streams."""
        return self.resolve(units, NameMatchesRegex(pattern), Projection.STREAM)

    def get_resource_as_string(self, unit: UnitLike, resource_name: str) -> str:
        """Read one resource by exact name and decode it.

        This is a strict lookup, not a search: the name must be present in
        the unit's listing.

        Args:
            unit: A single compiled unit, package name or module.
            resource_name: Exact resource name.

        Returns:
            Decoded resource content.

        Raises:
            ResourceNotFoundError: If the unit has no resource with this name.
            ResourceDecodeError: If the content is not valid text.
            InvalidContainerError: If the unit cannot produce a listing.
        """
        compiled_unit = _coerce_unit(unit)
        if resource_name not in self._list_names(compiled_unit):
            raise ResourceNotFoundError(compiled_unit.name, resource_name)

        descriptor = ResourceDescriptor.for_unit(compiled_unit, resource_name)
        return descriptor.read_text(self.encoding)


# Global default resolver instance
_default_resolver: ResourceResolver | None = None


def get_default_resolver() -> ResourceResolver:
    """Get the default global resource resolver instance.

    Returns:
        Singleton ResourceResolver instance.
    """
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = ResourceResolver()
    return _default_resolver


def list_all(units: Units) -> list[ResourceDescriptor]:
    """List every resource of every unit using the default resolver."""
    return get_default_resolver().list_all(units)


def list_all_as_string(units: Units) -> list[str]:
    """List every resource as text using the default resolver."""
    return get_default_resolver().list_all_as_string(units)


def list_all_as_stream(units: Units) -> list[IO[bytes]]:
    """Open every resource as a stream using the default resolver."""
    return get_default_resolver().list_all_as_stream(units)


def find_by_name(
    units: Units, name: str | None, ignore_case: bool = False
) -> list[ResourceDescriptor]:
    """Find resources by name substring using the default resolver."""
    return get_default_resolver().find_by_name(units, name, ignore_case)


def find_by_name_as_string(
    units: Units, name: str | None, ignore_case: bool = False
) -> list[str]:
    """Find resources by name substring as text using the default resolver."""
    return get_default_resolver().find_by_name_as_string(units, name, ignore_case)


def find_by_name_as_stream(
    units: Units, name: str | None, ignore_case: bool = False
) -> list[IO[bytes]]:
    """Find resources by name substring as streams using the default resolver."""
    return get_default_resolver().find_by_name_as_stream(units, name, ignore_case)


def find_by_names(
    units: Units, names: Iterable[str | None], ignore_case: bool = False
) -> list[ResourceDescriptor]:
    """Find resources by several name substrings using the default resolver."""
    return get_default_resolver().find_by_names(units, names, ignore_case)


def find_by_names_as_string(
    units: Units, names: Iterable[str | None], ignore_case: bool = False
) -> list[str]:
    """Find resources by several substrings as text using the default resolver."""
    return get_default_resolver().find_by_names_as_string(units, names, ignore_case)


def find_by_names_as_stream(
    units: Units, names: Iterable[str | None], ignore_case: bool = False
) -> list[IO[bytes]]:
    """Find resources by several substrings as streams using the default resolver."""
    return get_default_resolver().find_by_names_as_stream(units, names, ignore_case)


def find_by_regex(
    units: Units, pattern: str | re.Pattern[str]
) -> list[ResourceDescriptor]:
    """Find resources by regular expression using the default resolver."""
    return get_default_resolver().find_by_regex(units, pattern)


def find_by_regex_as_string(units: Units, pattern: str | re.Pattern[str]) -> list[str]:
    """Find resources by regular expression as text using the default resolver."""
    return get_default_resolver().find_by_regex_as_string(units, pattern)


def find_by_regex_as_stream(
    units: Units, pattern: str | re.Pattern[str]
) -> list[IO[bytes]]:
    """Find resources by regular expression as streams using the default resolver."""
    return get_default_resolver().find_by_regex_as_stream(units, pattern)


def get_resource_as_string(unit: UnitLike, resource_name: str) -> str:
    """Read one resource by exact name using the default resolver."""
    return get_default_resolver().get_resource_as_string(unit, resource_name)
