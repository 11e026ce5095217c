"""Rich text rendering for version lists and package headers."""

from __future__ import annotations

from typing import Iterable, Optional

from rich.columns import Columns
from rich.text import Text

from constants import Constants
from versioning.models import PackumentVersion

INSTALLED_MARK = "✔ "
INSTALLED_STYLE = "bold bright_magenta"
EXPLICIT_RANGE_STYLE = "bold bright_green"
LOCAL_RANGE_STYLE = "bold bright_yellow"
UNSATISFIED_STYLE = "grey50"
NAME_STYLE = "bold bright_cyan"
LOCAL_INFO_STYLE = "cyan"
ERROR_STYLE = "bright_red"


def format_version_string(
    version: str,
    is_installed: bool,
    is_satisfied: bool,
    is_local_range: bool,
) -> Text:
    """Render one version cell.

    Satisfied versions are green for an explicit range and yellow for a range
    taken from package.json; the installed version carries a magenta check.
    """
    satisfied_style = LOCAL_RANGE_STYLE if is_local_range else EXPLICIT_RANGE_STYLE
    text = Text()
    if is_installed:
        text.append(INSTALLED_MARK, style=INSTALLED_STYLE)
        text.append(version, style=satisfied_style if is_satisfied else INSTALLED_STYLE)
    elif is_satisfied:
        text.append(f"  {version}", style=satisfied_style)
    else:
        text.append(f"  {version}", style=UNSATISFIED_STYLE)
    return text


def format_package_info(info: PackumentVersion) -> Text:
    """Render the package header: name, then homepage when known."""
    text = Text()
    text.append(info.name, style=NAME_STYLE)
    if info.homepage:
        text.append(" | ")
        text.append(info.homepage, style="dim")
    return text


def format_local_package_info(
    pkg_name: str,
    local_range: Optional[str] = None,
    installed_version: Optional[str] = None,
) -> Text:
    """Render ``./node_modules/<name> | ✔ <installed> | <range>``.

    Returns empty text when neither piece of local information is known.
    """
    if not local_range and not installed_version:
        return Text()
    text = Text(style=LOCAL_INFO_STYLE)
    text.append(f"./{Constants.NODE_MODULES_DIR}/{pkg_name}")
    if installed_version:
        text.append(" | ")
        text.append(f"{INSTALLED_MARK}{installed_version}", style=INSTALLED_STYLE)
    if local_range:
        text.append(" | ")
        text.append(local_range, style=LOCAL_RANGE_STYLE)
    return text


def version_columns(cells: Iterable[Text]) -> Columns:
    """Lay out version cells in terminal-width columns, keeping their order."""
    return Columns(list(cells), column_first=True, padding=(0, 2))


def no_versions_message(range_str: Optional[str] = None) -> Text:
    if range_str:
        return Text(f"No versions found for range: {range_str}", style=ERROR_STYLE)
    return Text("No versions found", style=ERROR_STYLE)
