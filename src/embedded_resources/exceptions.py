"""Exception classes for embedded resource lookups."""

from __future__ import annotations


class EmbeddedResourceError(Exception):
    """Base exception for all embedded-resources errors."""

    pass


class ResourceNotFoundError(EmbeddedResourceError):
    """Raised when a resource name does not exist in a compiled unit.

    Only strict lookups raise this. Filtering operations return an empty
    list when nothing matches.
    """

    def __init__(self, container: str, name: str) -> None:
        self.container = container
        self.name = name
        super().__init__(
            f"Resource '{name}' not found in unit '{container}'. "
            "Check the resource name and that it is bundled with the unit."
        )


class ResourceDecodeError(EmbeddedResourceError):
    """Raised when resource bytes cannot be decoded as text."""

    def __init__(self, container: str, name: str, encoding: str) -> None:
        self.container = container
        self.name = name
        self.encoding = encoding
        super().__init__(
            f"Resource '{name}' in unit '{container}' is not valid {encoding} text"
        )


class InvalidContainerError(EmbeddedResourceError):
    """Raised when a compiled unit cannot produce a resource listing."""

    def __init__(self, container: str, reason: str) -> None:
        self.container = container
        self.reason = reason
        super().__init__(f"Invalid compiled unit '{container}': {reason}")
