"""Version resolvers for registries whatver can query."""

from .npm import NpmVersionResolver

__all__ = [
    "NpmVersionResolver",
]
