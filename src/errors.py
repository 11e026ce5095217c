"""Exception types raised by version resolution and local lookups."""

from __future__ import annotations

from typing import Optional


class WhatverError(Exception):
    """Base class for all errors raised by whatver."""


class InvalidRangeError(WhatverError):
    """A supplied semver range failed to parse."""

    def __init__(self, range_str: str):
        self.range_str = range_str
        super().__init__(f"Invalid semver range: {range_str}")


class NotFoundError(WhatverError):
    """The registry has no package with the requested name."""

    def __init__(self, package_name: str):
        self.package_name = package_name
        super().__init__(f"Package '{package_name}' not found in npm registry")


class RegistryError(WhatverError):
    """Non-404 failure status or transport failure during a registry read."""

    def __init__(self, message: str, status: Optional[int] = None, reason: Optional[str] = None):
        self.status = status
        self.reason = reason
        super().__init__(message)

    @classmethod
    def from_status(cls, status: int, reason: Optional[str]) -> "RegistryError":
        """Build the error for an unexpected HTTP status."""
        text = f"{status} {reason}" if reason else str(status)
        return cls(f"Registry responded with {text}", status=status, reason=reason)


class InvalidResponseError(WhatverError):
    """The registry answered 2xx but the body has an unrecognized shape."""

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail
        super().__init__("Invalid npm registry response format")


class FetchError(WhatverError):
    """Outer error for any registry read failure.

    The message is ``prefix + str(cause)``; the inner error is kept both as
    ``cause`` and as the exception's ``__cause__``.
    """

    VERSIONS_PREFIX = "Failed to fetch package versions: "
    INFO_PREFIX = "Failed to fetch package info: "

    def __init__(self, prefix: str, cause: BaseException):
        self.cause = cause
        super().__init__(f"{prefix}{cause}")


class InvalidManifestError(WhatverError):
    """A local package.json parsed badly or lacks required fields."""

    def __init__(self, path: str, detail: Optional[str] = None):
        self.path = path
        self.detail = detail
        message = f"Invalid package.json: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class NotDeclaredError(WhatverError):
    """The package is absent from every dependency category of package.json."""

    def __init__(self, package_name: str):
        self.package_name = package_name
        super().__init__(f"Package '{package_name}' not found in package.json")
