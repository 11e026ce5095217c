"""NPM version resolver: fetch, sort, filter and classify published versions."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, List, Optional, TypeVar

import aiohttp

from common.logging_utils import extra_context, is_debug_enabled
from errors import (
    FetchError,
    InvalidRangeError,
    InvalidResponseError,
    NotFoundError,
    RegistryError,
)
from registry.npm.client import NpmRegistryClient
from registry.npm.schemas import parse_manifest, parse_packument_version
from validate import SchemaError
from versioning.models import PackumentVersion, QueryOptions, VersionRecord
from versioning.semver import NpmRange, is_prerelease, parse_version, sort_versions

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NpmVersionResolver:
    """Resolver for npm packages against npm semver ranges."""

    def __init__(self, client: NpmRegistryClient):
        self.client = client

    async def fetch_versions(self, pkg_name: str) -> List[str]:
        """Fetch every published version string of ``pkg_name``.

        Returns:
            Version keys in registry order.

        Raises:
            FetchError: Wrapping NotFoundError, RegistryError or
                InvalidResponseError.
        """
        return await self._fetch(
            pkg_name,
            self.client.get_versions_document,
            parse_manifest,
            FetchError.VERSIONS_PREFIX,
        )

    async def fetch_package_info(self, pkg_name: str) -> PackumentVersion:
        """Fetch the ``latest`` version document of ``pkg_name`` for display."""
        return await self._fetch(
            pkg_name,
            self.client.get_latest_document,
            parse_packument_version,
            FetchError.INFO_PREFIX,
        )

    async def resolve_versions(
        self,
        pkg_name: str,
        range_str: Optional[str] = None,
        options: QueryOptions = QueryOptions(),
    ) -> List[VersionRecord]:
        """List versions ascending, each flagged with range satisfaction.

        Args:
            pkg_name: Package name, scoped or unscoped.
            range_str: Optional npm range; empty means no range.
            options: Prerelease policy.

        Raises:
            InvalidRangeError: Before any network access when the range is invalid.
            FetchError: When the registry read fails.
        """
        npm_range = None
        if range_str:
            try:
                npm_range = NpmRange(range_str)
            except ValueError as exc:
                raise InvalidRangeError(range_str) from exc

        versions = sort_versions(await self.fetch_versions(pkg_name))

        records = []
        for v in versions:
            ver = parse_version(v)
            if not options.show_prerelease and is_prerelease(ver):
                continue
            satisfied = False
            if npm_range is not None:
                satisfied = npm_range.match(ver, include_prerelease=options.show_prerelease)
            records.append(VersionRecord(version=v, satisfied=satisfied))

        if is_debug_enabled(logger):
            logger.debug(
                "Resolved versions",
                extra=extra_context(
                    event="resolve",
                    component="resolver",
                    action="resolve_versions",
                    package=pkg_name,
                    range=range_str,
                    count=len(records),
                    satisfied=sum(1 for r in records if r.satisfied),
                ),
            )
        return records

    async def satisfied_versions(
        self,
        pkg_name: str,
        range_str: str,
        options: QueryOptions = QueryOptions(),
    ) -> List[str]:
        """List only the versions satisfying ``range_str``, ascending.

        Raises:
            ValueError: If no range is given.
        """
        if not range_str:
            raise ValueError("satisfied_versions requires a semver range")
        records = await self.resolve_versions(pkg_name, range_str, options)
        return [r.version for r in records if r.satisfied]

    async def _fetch(
        self,
        pkg_name: str,
        getter: Callable[[str], Any],
        parser: Callable[[Any], T],
        prefix: str,
    ) -> T:
        """Run one registry read and map every failure onto FetchError."""
        try:
            try:
                status, reason, data = await getter(pkg_name)
            except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
                raise RegistryError(str(exc) or type(exc).__name__) from exc

            if status == 404:
                raise NotFoundError(pkg_name)
            if not 200 <= status < 300:
                raise RegistryError.from_status(status, reason)

            try:
                return parser(data)
            except SchemaError as exc:
                raise InvalidResponseError(str(exc)) from exc
        except (NotFoundError, RegistryError, InvalidResponseError) as inner:
            logger.debug("Registry read failed for %s: %s", pkg_name, inner)
            raise FetchError(prefix, inner) from inner
