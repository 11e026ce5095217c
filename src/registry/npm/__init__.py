"""NPM registry package.

This package provides npm support:
- client.py: HTTP interactions with the npm registry (abbreviated and latest documents)
- schemas.py: JSON Schemas for registry documents and package.json
- local.py: declared range and installed version from the local project
"""

from .client import NpmRegistryClient  # noqa: F401
from .local import local_declared_range, local_installed_version, try_or_none  # noqa: F401

__all__ = [
    "NpmRegistryClient",
    "local_declared_range",
    "local_installed_version",
    "try_or_none",
]
