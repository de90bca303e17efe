"""Settings discovery, parsing, and audit mode selection."""

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)

AUTO_APPROVE_KEY = "chat.tools.terminal.autoApprove"
SETTINGS_DIRNAME = ".vscode"
SETTINGS_FILENAME = "settings.json"
WORKSPACE_SUFFIX = ".code-workspace"
USER_SETTINGS_ENV = "AUTOAPPROVE_AUDIT_USER_SETTINGS"

_SKIP_DIRS = frozenset({"node_modules", ".git", "build", "dist", "out"})


class SettingsError(Exception):
    """Raised when a settings file cannot be read or parsed."""


@dataclass(frozen=True)
class AutoScan:
    """No allow-list given: every prefix is reported through health stats."""

    @property
    def prefixes(self) -> tuple[str, ...]:
        return ()


@dataclass(frozen=True)
class ExplicitAllowlist:
    """Only patterns built from these prefixes may be auto-approved."""

    prefixes: tuple[str, ...]


AuditMode = Union[AutoScan, ExplicitAllowlist]


def parse_allow_prefix(value: str | None) -> AuditMode:
    """Turn the comma-separated `--allow-prefix` value into an audit mode.

    An omitted flag and a flag with no usable prefixes both mean auto-scan.
    """
    if value is None:
        return AutoScan()

    prefixes: list[str] = []
    for part in value.split(","):
        part = part.strip()
        if part and part not in prefixes:
            prefixes.append(part)

    if not prefixes:
        logger.warning("--allow-prefix %r has no prefixes, using auto-scan", value)
        return AutoScan()

    return ExplicitAllowlist(prefixes=tuple(prefixes))


def strip_json_comments(text: str) -> str:
    """Remove `//` and `/* */` comments and trailing commas outside strings."""
    out: list[str] = []
    in_string = False
    escape = False
    pending_comma: int | None = None

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]

        if in_string:
            out.append(ch)
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            i += 1
            continue

        if ch == "/" and text.startswith("//", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
            continue

        if ch == "/" and text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
            continue

        if ch == '"':
            pending_comma = None
            in_string = True
            out.append(ch)
            i += 1
            continue

        if ch == ",":
            pending_comma = len(out)
            out.append(ch)
            i += 1
            continue

        if ch in "}]" and pending_comma is not None:
            out[pending_comma] = ""
            pending_comma = None
        elif not ch.isspace():
            pending_comma = None

        out.append(ch)
        i += 1

    return "".join(out)


def read_settings_file(path: Path) -> dict[str, Any]:
    """Read and parse a settings file, raising SettingsError on any problem."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SettingsError(f"cannot read file: {e}") from e

    if not content.strip():
        raise SettingsError("settings file is empty")

    try:
        data = json.loads(strip_json_comments(content))
    except json.JSONDecodeError as e:
        raise SettingsError(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise SettingsError("settings must be a JSON object")

    return data


def load_settings(path: Path) -> dict[str, Any] | None:
    """Load a settings file.

    Returns None if the file doesn't exist, can't be read, or isn't a JSON object.
    """
    if not path.is_file():
        return None

    try:
        return read_settings_file(path)
    except SettingsError as e:
        logger.debug("skipping %s: %s", path, e)
        return None


def extract_rule_map(data: Any, path: Path | None = None) -> dict[str, Any] | None:
    """Return the auto-approve mapping from parsed settings, or None.

    Workspace files keep their settings under a nested `settings` object.
    """
    if not isinstance(data, dict):
        return None

    container: Any = data
    if path is not None and path.name.endswith(WORKSPACE_SUFFIX):
        container = data.get("settings")
        if not isinstance(container, dict):
            return None

    rule_map = container.get(AUTO_APPROVE_KEY)
    if not isinstance(rule_map, dict):
        return None
    return rule_map


def user_settings_path() -> Path:
    """Return the per-user editor settings path for this platform."""
    override = os.environ.get(USER_SETTINGS_ENV)
    if override:
        return Path(override).expanduser()

    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / "Code" / "User" / SETTINGS_FILENAME
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        base = Path(appdata) if appdata else home / "AppData" / "Roaming"
        return base / "Code" / "User" / SETTINGS_FILENAME
    return home / ".config" / "Code" / "User" / SETTINGS_FILENAME


def _is_candidate(path: Path) -> bool:
    if path.name == SETTINGS_FILENAME and path.parent.name == SETTINGS_DIRNAME:
        return True
    return path.name.endswith(WORKSPACE_SUFFIX)


def find_workspace_settings(root: Path) -> list[Path]:
    """Walk `root` and return workspace settings files in sorted order."""
    found: list[Path] = []

    def on_error(err: OSError) -> None:
        logger.debug("cannot list %s: %s", err.filename, err)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = sorted(d for d in dirnames if d not in _SKIP_DIRS)
        for name in sorted(filenames):
            candidate = Path(dirpath) / name
            if _is_candidate(candidate):
                found.append(candidate)
    return found


def discover_settings_files(root: Path | None = None) -> list[Path]:
    """Return the user settings file (if present) followed by workspace files."""
    results: list[Path] = []

    user_path = user_settings_path()
    if user_path.is_file():
        results.append(user_path)

    base = root if root is not None else Path.cwd()
    for path in find_workspace_settings(base):
        if path not in results:
            results.append(path)

    logger.debug("discovered %d settings file(s) under %s", len(results), base)
    return results


def resolve_sources(settings_file: Path | None, root: Path | None = None) -> list[Path]:
    """An explicit settings file replaces discovery entirely."""
    if settings_file is not None:
        return [settings_file]
    return discover_settings_files(root)
