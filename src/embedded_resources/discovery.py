"""Discovery of compiled units registered by installed distributions."""

from __future__ import annotations

import logging
import os
import warnings
from importlib.metadata import entry_points

from embedded_resources.types import CompiledUnit, DuplicateUnitWarning
from embedded_resources.units import PackageUnit

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "embedded_resources.units"


def _parse_blocklist(blocklist: set[str] | None) -> set[str]:
    """Parse blocklist from argument and environment variable.

    Args:
        blocklist: Blocklist from caller.

    Returns:
        Merged set of blocked entry point names.
    """
    result = set(blocklist) if blocklist else set()

    # Merge with environment variable
    env_blocklist = os.environ.get("EMBEDDED_RESOURCES_BLOCKLIST", "")
    if env_blocklist:
        result.update(
            name.strip() for name in env_blocklist.split(",") if name.strip()
        )

    return result


def discover_units(blocklist: set[str] | None = None) -> list[CompiledUnit]:
    """Load compiled units from the ``embedded_resources.units`` entry point group.

    Each entry point refers to a factory returning either a compiled unit or
    the name of a package whose data files form the unit. A distribution
    registers one like this::

        [project.entry-points."embedded_resources.units"]
        templates = "myapp.resources:templates_unit"

    Entry points that fail to load, or whose factory returns something that
    is not a unit, are skipped with a warning in the log.

    Args:
        blocklist: Entry point names to skip. Merged with the comma-separated
            EMBEDDED_RESOURCES_BLOCKLIST environment variable.

    Returns:
        Units sorted by entry point name, ready to pass to any resolver call.
    """
    blocked = _parse_blocklist(blocklist)
    found: list[tuple[str, CompiledUnit]] = []

    for ep in entry_points(group=ENTRY_POINT_GROUP):
        if ep.name in blocked:
            logger.debug("Skipping blocked unit entry point %s", ep.name)
            continue

        try:
            result = ep.load()()
        except Exception:
            logger.warning("Failed to load unit entry point %s", ep.name, exc_info=True)
            continue

        if isinstance(result, str):
            result = PackageUnit(result)
        if not isinstance(result, CompiledUnit):
            logger.warning(
                "Entry point %s returned %r, which is not a compiled unit",
                ep.name,
                result,
            )
            continue

        found.append((ep.name, result))

    # Sort by entry point name for deterministic ordering
    found.sort(key=lambda item: item[0])

    seen: dict[str, str] = {}
    for ep_name, unit in found:
        if unit.name in seen:
            warnings.warn(
                f"Unit name '{unit.name}' from entry point '{ep_name}' is already "
                f"used by entry point '{seen[unit.name]}'. Descriptors from both "
                "units will report the same container.",
                DuplicateUnitWarning,
                stacklevel=2,
            )
        else:
            seen[unit.name] = ep_name

    return [unit for _, unit in found]
