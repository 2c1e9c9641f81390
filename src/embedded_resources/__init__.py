"""embedded-resources - Query resources embedded in compiled units."""

from embedded_resources.core import (
    ResourceResolver,
    find_by_name,
    find_by_name_as_stream,
    find_by_name_as_string,
    find_by_names,
    find_by_names_as_stream,
    find_by_names_as_string,
    find_by_regex,
    find_by_regex_as_stream,
    find_by_regex_as_string,
    get_default_resolver,
    get_resource_as_string,
    list_all,
    list_all_as_stream,
    list_all_as_string,
)
from embedded_resources.discovery import discover_units
from embedded_resources.exceptions import (
    EmbeddedResourceError,
    InvalidContainerError,
    ResourceDecodeError,
    ResourceNotFoundError,
)
from embedded_resources.selectors import (
    All,
    NameContains,
    NameIn,
    NameMatchesRegex,
    Selector,
    contains_ignorable,
)
from embedded_resources.types import (
    DEFAULT_ENCODING,
    CompiledUnit,
    DuplicateUnitWarning,
    Projection,
    ResourceDescriptor,
)
from embedded_resources.units import MappingUnit, PackageUnit, ZippedUnit

__version__ = "0.1.0.dev0"

__all__ = [
    "DEFAULT_ENCODING",
    "All",
    "CompiledUnit",
    "DuplicateUnitWarning",
    "EmbeddedResourceError",
    "InvalidContainerError",
    "MappingUnit",
    "NameContains",
    "NameIn",
    "NameMatchesRegex",
    "PackageUnit",
    "Projection",
    "ResourceDecodeError",
    "ResourceDescriptor",
    "ResourceNotFoundError",
    "ResourceResolver",
    "Selector",
    "ZippedUnit",
    "contains_ignorable",
    "discover_units",
    "find_by_name",
    "find_by_name_as_stream",
    "find_by_name_as_string",
    "find_by_names",
    "find_by_names_as_stream",
    "find_by_names_as_string",
    "find_by_regex",
    "find_by_regex_as_stream",
    "find_by_regex_as_string",
    "get_default_resolver",
    "get_resource_as_string",
    "list_all",
    "list_all_as_stream",
    "list_all_as_string",
]
