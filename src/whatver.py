"""whatver - which versions of an npm package satisfy a semver range."""
import asyncio
import logging
import sys

from rich.console import Console
from rich.text import Text

from args import parse_args
from cli_config import Settings, resolve_settings
from common.logging_utils import add_file_handler, configure_logging, extra_context, is_debug_enabled
from constants import ExitCodes
from errors import WhatverError
from output.format import (
    ERROR_STYLE,
    format_local_package_info,
    format_package_info,
    format_version_string,
    no_versions_message,
    version_columns,
)
from registry.npm.client import NpmRegistryClient
from registry.npm.local import local_declared_range, local_installed_version, try_or_none
from versioning.models import QueryOptions
from versioning.resolvers.npm import NpmVersionResolver

logger = logging.getLogger(__name__)


async def run(args, settings: Settings, console: Console) -> None:
    """Query the registry and print the version list for ``args.package``."""
    pkg = args.package
    options = QueryOptions(show_prerelease=args.SHOW_PRERELEASE)

    async with NpmRegistryClient(settings.registry_url, settings.request_timeout) as client:
        resolver = NpmVersionResolver(client)
        package_info = await resolver.fetch_package_info(pkg)

        local_range = try_or_none(local_declared_range, pkg)
        installed_version = try_or_none(local_installed_version, pkg)

        console.print(format_package_info(package_info))
        if local_range or installed_version:
            console.print(format_local_package_info(pkg, local_range, installed_version))

        effective_range = args.range or local_range
        show_all_versions = args.ALL or not effective_range
        is_local_range = not args.range

        if is_debug_enabled(logger):
            logger.debug(
                "Query plan",
                extra=extra_context(
                    event="decision",
                    component="cli",
                    action="run",
                    package=pkg,
                    range=effective_range,
                    range_source="cli" if args.range else ("local" if local_range else None),
                    show_all=show_all_versions,
                ),
            )

        if show_all_versions:
            records = await resolver.resolve_versions(pkg, effective_range, options)
            if not records:
                console.print(no_versions_message())
                return
            cells = [
                format_version_string(r.version, r.version == installed_version, r.satisfied, is_local_range)
                for r in records
            ]
        else:
            versions = await resolver.satisfied_versions(pkg, effective_range, options)
            if not versions:
                console.print(no_versions_message(effective_range))
                return
            cells = [
                format_version_string(v, v == installed_version, True, is_local_range)
                for v in versions
            ]

    console.print(version_columns(cells))


def main(argv=None, console: Console = None, err_console: Console = None) -> int:
    """Main function of the program."""
    args = parse_args(argv)
    settings = resolve_settings(args)
    configure_logging(settings.log_level)
    if getattr(args, "LOG_FILE", None):
        add_file_handler(args.LOG_FILE)

    console = console or Console()
    err_console = err_console or Console(stderr=True)

    logger.info("Checking %s against %s", args.package, settings.registry_url)
    try:
        asyncio.run(run(args, settings, console))
    except WhatverError as exc:
        logger.debug("Command failed", exc_info=True)
        err_console.print(Text(str(exc), style=ERROR_STYLE))
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())
