"""Argument parsing functionality for whatver."""

import argparse
from importlib.metadata import PackageNotFoundError, version

from constants import Constants


def _program_version():
    try:
        return version(Constants.PROG_NAME)
    except PackageNotFoundError:
        return "unknown"


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog=Constants.PROG_NAME,
        description=(
            "Check npm package versions against semver ranges. Automatically "
            "detects local packages from package.json and shows their installed "
            "versions if available."
        ),
        epilog=(
            "examples:\n"
            "  whatver lodash                        uses the local semver range if found in package.json\n"
            "  whatver lodash \"^4.17\"                versions of lodash satisfying ^4.17\n"
            "  whatver react --all                   all react versions, local range highlighted\n"
            "  whatver typescript --show-prerelease  include prerelease versions"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=True,
    )

    parser.add_argument("package",
                        help="The npm package name to check",
                        type=str)
    parser.add_argument("range",
                        nargs="?",
                        default=None,
                        help="The semver range to check against (uses local package.json range if not provided)",
                        type=str)

    parser.add_argument("-a", "--all",
                        dest="ALL",
                        help="Show all versions (including non-matching ones)",
                        action="store_true")
    parser.add_argument("-p", "--show-prerelease",
                        dest="SHOW_PRERELEASE",
                        help="Include prerelease versions (e.g., 1.0.0-alpha.1)",
                        action="store_true")
    parser.add_argument("-v", "--version",
                        action="version",
                        version=f"%(prog)s {_program_version()}")

    parser.add_argument("--registry",
                        dest="REGISTRY",
                        help="npm registry base URL (default: %s)" % Constants.REGISTRY_URL_NPM,
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
