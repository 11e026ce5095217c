"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0


class DependencyTypes(Enum):
    """Dependency categories of a package.json, in lookup order.

    Args:
        Enum (string): package.json field names.
    """

    RUNTIME = "dependencies"
    DEVELOPMENT = "devDependencies"
    PEER = "peerDependencies"
    OPTIONAL = "optionalDependencies"


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PROG_NAME = "whatver"
    REGISTRY_URL_NPM = "https://registry.npmjs.org/"
    # Abbreviated packument; see npm/registry docs/responses/package-metadata.md
    NPM_INSTALL_ACCEPT = "application/vnd.npm.install-v1+json"
    NPM_LATEST_TAG = "latest"
    PACKAGE_JSON_FILE = "package.json"
    NODE_MODULES_DIR = "node_modules"
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVEL_DEFAULT = "WARNING"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for registry requests
    USER_AGENT = "whatver/1.0"

    ENV_CONFIG = "WHATVER_CONFIG"
    ENV_LOG_LEVEL = "WHATVER_LOG_LEVEL"
    ENV_REGISTRY_URL = "WHATVER_REGISTRY_URL"
    ENV_REQUEST_TIMEOUT = "WHATVER_REQUEST_TIMEOUT"
