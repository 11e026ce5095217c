"""JSON Schemas for npm documents read by whatver.

Only the fields the tool reads are constrained; everything else is allowed
through so registry additions never break parsing.
"""

from __future__ import annotations

from typing import Any, Dict, List

from constants import DependencyTypes
from validate import validate_document
from versioning.models import LocalProjectManifest, PackumentVersion

# Abbreviated or full packument: a "versions" object keyed by version string.
MANIFEST_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["versions"],
    "properties": {
        "versions": {"type": "object"},
    },
}

DIST_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["shasum", "tarball", "signatures"],
    "properties": {
        "shasum": {"type": "string"},
        "tarball": {"type": "string"},
        "signatures": {"type": "array"},
        "integrity": {"type": "string"},
    },
}

PACKUMENT_VERSION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["name", "_id", "dist"],
    "properties": {
        "name": {"type": "string"},
        "_id": {"type": "string"},
        "version": {"type": "string"},
        "description": {"type": "string"},
        "homepage": {"type": "string"},
        "repository": {
            "anyOf": [
                {"type": "string"},
                {"type": "object", "properties": {"url": {"type": "string"}}},
            ]
        },
        "dist": DIST_SCHEMA,
    },
}

_DEPENDENCY_MAP: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": {"type": "string"},
}

PACKAGE_JSON_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["version"],
    "properties": {
        "version": {"type": "string"},
        **{dep_type.value: _DEPENDENCY_MAP for dep_type in DependencyTypes},
    },
}


def parse_manifest(data: Any) -> List[str]:
    """Return the version keys of a registry manifest, in document order."""
    validate_document(MANIFEST_SCHEMA, data)
    return list(data["versions"].keys())


def parse_packument_version(data: Any) -> PackumentVersion:
    """Validate and convert a ``/<name>/latest`` document."""
    validate_document(PACKUMENT_VERSION_SCHEMA, data)
    return PackumentVersion.from_json(data)


def parse_package_json(data: Any) -> LocalProjectManifest:
    """Validate and convert a package.json document."""
    validate_document(PACKAGE_JSON_SCHEMA, data)
    return LocalProjectManifest.from_json(data)
