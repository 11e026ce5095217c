"""Local project lookups: declared range and installed version of a package.

Both lookups are synchronous reads relative to a project directory
(the process working directory by default). Missing files raise the
underlying ``OSError``; the CLI wraps each call in ``try_or_none``.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Callable, Optional, TypeVar

from constants import Constants
from errors import InvalidManifestError, NotDeclaredError
from registry.npm.schemas import parse_package_json
from validate import SchemaError
from versioning.models import LocalProjectManifest

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _load_manifest(path: str) -> LocalProjectManifest:
    """Read and validate a package.json file.

    Raises:
        OSError: If the file cannot be read.
        InvalidManifestError: If it is not JSON or lacks a string ``version``.
    """
    with open(path, encoding="utf-8") as file:
        raw = file.read()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise InvalidManifestError(path, f"not valid JSON: {exc.msg}") from exc
    try:
        return parse_package_json(data)
    except SchemaError as exc:
        raise InvalidManifestError(path, str(exc)) from exc


def installed_manifest_path(pkg_name: str, cwd: Optional[str] = None) -> str:
    """Path of ``node_modules/<name>/package.json``; scopes add a directory level."""
    base = cwd or os.getcwd()
    return os.path.join(base, Constants.NODE_MODULES_DIR, *pkg_name.split("/"), Constants.PACKAGE_JSON_FILE)


def local_declared_range(pkg_name: str, cwd: Optional[str] = None) -> str:
    """Find the range declared for ``pkg_name`` in the project's package.json.

    Categories are searched in order: dependencies, devDependencies,
    peerDependencies, optionalDependencies. The first category containing
    the package wins.

    Raises:
        OSError: If package.json is absent or unreadable.
        InvalidManifestError: If package.json is malformed.
        NotDeclaredError: If no category declares the package.
    """
    path = os.path.join(cwd or os.getcwd(), Constants.PACKAGE_JSON_FILE)
    manifest = _load_manifest(path)
    for deps in manifest.categories():
        if pkg_name in deps:
            return deps[pkg_name]
    raise NotDeclaredError(pkg_name)


def local_installed_version(pkg_name: str, cwd: Optional[str] = None) -> str:
    """Return the version of ``pkg_name`` installed under node_modules.

    Raises:
        OSError: If the package is not installed.
        InvalidManifestError: If its package.json is malformed.
    """
    return _load_manifest(installed_manifest_path(pkg_name, cwd)).version


def try_or_none(func: Callable[..., T], *args, **kwargs) -> Optional[T]:
    """Call ``func`` and turn any failure into None.

    Only for local lookups, where missing information is expected.
    """
    try:
        return func(*args, **kwargs)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        logger.debug("Local lookup %s failed: %s", getattr(func, "__name__", func), exc)
        return None
