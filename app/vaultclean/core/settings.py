"""Persisted cleanup settings.

This module provides the settings model and I/O functions for the
cleanup rules: cleanable and protected filename patterns, scan depth,
hidden-entry handling, minimum file size, and language preference.

Settings are stored in ~/.config/vaultclean/settings.toml. A missing
file means defaults. Older settings files that list file extensions
(``cleanable_extensions`` / ``protected_extensions``) are migrated to
the equivalent regular expressions on load.
"""

import logging
import os
import re
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated, Any, Literal

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from vaultclean.core.paths import get_settings_path
from vaultclean.scanner.models import ScanConfiguration

logger = logging.getLogger(__name__)

Language = Literal["en-US", "zh-CN"]

DEFAULT_CLEANABLE_PATTERN = ".*"
DEFAULT_PROTECTED_PATTERN = r"\.(md|canvas|base)$"
MAX_SCAN_DEPTH_LIMIT = 20

_LEGACY_KEYS: dict[str, str] = {
    "cleanable_extensions": "cleanable_pattern",
    "protected_extensions": "protected_pattern",
}


class Settings(BaseModel):
    """User-configurable cleanup settings.

    Attributes:
        cleanable_pattern: Regex; matching files are cleanup candidates.
        protected_pattern: Regex; matching files are never candidates.
        max_scan_depth: Deepest directory level evaluated (0-20).
        exclude_hidden: Skip dot-prefixed entries during scans.
        min_file_size: Files smaller than this many bytes are kept.
        language: Preferred interface language.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    cleanable_pattern: Annotated[
        str,
        Field(description="Regex marking files as cleanup candidates"),
    ] = DEFAULT_CLEANABLE_PATTERN
    protected_pattern: Annotated[
        str,
        Field(description="Regex excluding files from cleanup"),
    ] = DEFAULT_PROTECTED_PATTERN
    max_scan_depth: Annotated[
        int,
        Field(ge=0, le=MAX_SCAN_DEPTH_LIMIT, description="Maximum scan depth (0-20)"),
    ] = 10
    exclude_hidden: Annotated[
        bool,
        Field(description="Skip hidden files and folders"),
    ] = True
    min_file_size: Annotated[
        int,
        Field(ge=0, description="Minimum file size in bytes"),
    ] = 0
    language: Annotated[
        Language,
        Field(description="Interface language"),
    ] = "en-US"

    def to_scan_config(self, **overrides: Any) -> ScanConfiguration:
        """Build an immutable scan configuration from these settings.

        Args:
            **overrides: Per-call values for ``max_depth``, ``exclude_hidden``,
                ``min_file_size``, ``cleanable_pattern`` or
                ``protected_pattern``. None values are ignored.

        Returns:
            ScanConfiguration for one scan.
        """
        values: dict[str, Any] = {
            "max_depth": self.max_scan_depth,
            "exclude_hidden": self.exclude_hidden,
            "min_file_size": self.min_file_size,
            "cleanable_pattern": self.cleanable_pattern,
            "protected_pattern": self.protected_pattern,
        }
        for key, value in overrides.items():
            if key not in values:
                msg = f"Unknown scan option: {key}"
                raise TypeError(msg)
            if value is not None:
                values[key] = value
        return ScanConfiguration(**values)


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


class SettingsValidationError(SettingsError):
    """Raised when the settings file content is invalid."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings. Defaults if the file does not exist.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsValidationError: If the content doesn't match the schema.
        SettingsError: If the file cannot be read.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        logger.debug("No settings file at %s, using defaults", settings_path)
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    data = migrate_legacy_settings(data, source=settings_path)

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsValidationError(f"Invalid settings content: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.

    Args:
        settings: The Settings object to save.
        path: Path to save to. If None, uses the default path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(settings.model_dump(), f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path


def reset_settings(path: Path | None = None) -> Settings:
    """Overwrite the settings file with defaults.

    Returns:
        The default Settings that were saved.
    """
    settings = Settings()
    save_settings(settings, path)
    return settings


def migrate_legacy_settings(data: dict[str, Any], source: Path | None = None) -> dict[str, Any]:
    """Convert legacy extension lists into regular expressions.

    ``cleanable_extensions = [".log", ".tmp"]`` becomes
    ``cleanable_pattern = '\\.(log|tmp)$'``. A ``".*"`` entry stands for
    every file. An explicit pattern already present in the file wins
    over its legacy list.

    Args:
        data: Raw settings dictionary (not modified).
        source: Settings file path, for the warning message.

    Returns:
        Settings dictionary without legacy keys.
    """
    migrated = dict(data)
    for legacy_key, pattern_key in _LEGACY_KEYS.items():
        if legacy_key not in migrated:
            continue
        extensions = migrated.pop(legacy_key)
        logger.warning(
            "Deprecated '%s' in %s. Migrating to '%s'.",
            legacy_key,
            source or "settings",
            pattern_key,
        )
        if pattern_key in migrated:
            continue
        empty_default = DEFAULT_CLEANABLE_PATTERN if pattern_key == "cleanable_pattern" else ""
        migrated[pattern_key] = extensions_to_pattern(extensions, empty_default=empty_default)
    return migrated


def extensions_to_pattern(extensions: Any, *, empty_default: str = "") -> str:
    """Build a filename regex equivalent to a list of extensions.

    Args:
        extensions: Iterable of extensions such as ``".md"`` or ``"log"``.
        empty_default: Pattern to return when the list is empty.

    Returns:
        Regex source matching any of the extensions at the end of a name.
    """
    if not isinstance(extensions, list):
        return empty_default

    parts: list[str] = []
    for ext in extensions:
        if not isinstance(ext, str):
            continue
        cleaned = ext.strip().lstrip(".")
        if cleaned in ("*", ".*"):
            return ".*"
        if cleaned and re.escape(cleaned) not in parts:
            parts.append(re.escape(cleaned))

    if not parts:
        return empty_default
    return rf"\.({'|'.join(parts)})$"
