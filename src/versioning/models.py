"""Data models for version resolution and registry metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class VersionRecord:
    """One published version and whether it satisfies the active range."""
    version: str
    satisfied: bool


@dataclass(frozen=True)
class QueryOptions:
    """Per-query behavior flags."""
    show_prerelease: bool = False


@dataclass
class Dist:
    """Distribution block of a published version."""
    shasum: str
    tarball: str
    signatures: List[Dict[str, Any]] = field(default_factory=list)
    integrity: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Dist":
        """Build from a schema-validated ``dist`` object."""
        return cls(
            shasum=data["shasum"],
            tarball=data["tarball"],
            signatures=list(data["signatures"]),
            integrity=data.get("integrity"),
        )


@dataclass
class PackumentVersion:
    """Single-version registry document, used for display only."""
    name: str
    id: str  # registry "_id", e.g. "lodash@4.17.21"
    dist: Dist
    version: Optional[str] = None
    description: Optional[str] = None
    homepage: Optional[str] = None
    repository_url: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "PackumentVersion":
        """Build from a schema-validated packument version document."""
        repository = data.get("repository")
        if isinstance(repository, dict):
            repository_url = repository.get("url")
        else:
            repository_url = repository
        return cls(
            name=data["name"],
            id=data["_id"],
            dist=Dist.from_json(data["dist"]),
            version=data.get("version"),
            description=data.get("description"),
            homepage=data.get("homepage"),
            repository_url=repository_url,
        )


@dataclass
class LocalProjectManifest:
    """The parts of a local package.json that lookups care about."""
    version: str
    dependencies: Dict[str, str] = field(default_factory=dict)
    dev_dependencies: Dict[str, str] = field(default_factory=dict)
    peer_dependencies: Dict[str, str] = field(default_factory=dict)
    optional_dependencies: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "LocalProjectManifest":
        """Build from a schema-validated package.json document."""
        return cls(
            version=data["version"],
            dependencies=dict(data.get("dependencies") or {}),
            dev_dependencies=dict(data.get("devDependencies") or {}),
            peer_dependencies=dict(data.get("peerDependencies") or {}),
            optional_dependencies=dict(data.get("optionalDependencies") or {}),
        )

    def categories(self) -> List[Dict[str, str]]:
        """Dependency maps in lookup order: runtime, dev, peer, optional."""
        return [
            self.dependencies,
            self.dev_dependencies,
            self.peer_dependencies,
            self.optional_dependencies,
        ]
