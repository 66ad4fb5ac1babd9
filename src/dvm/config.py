"""
Platform configuration loading.

Reads platform definitions from a YAML or JSON file:

    platforms:
      android:
        valueTransformFields: [value, value_darkMode, value_hiContrast]
        files:
          - destination: colors.json
            valueField: value
          - destination: colors-night.json
            valueField: [value_darkMode, value]

Keys are accepted in camelCase (as written by token tooling) or
snake_case. JSON is a subset of YAML, so one loader serves both.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, List

import yaml

from dvm.model import DEFAULT_VALUE_TRANSFORM_FIELDS, FileConfig, Platform


log = logging.getLogger(__name__)


class PlatformConfigError(ValueError):
    """Raised when a platform configuration is malformed."""
    pass


def _get(d: Mapping, camel: str, snake: str, default: Any = None) -> Any:
    if camel in d:
        return d[camel]
    return d.get(snake, default)


def _value_field_from_config(raw: Any, where: str):
    if raw is None or isinstance(raw, str):
        return raw
    if isinstance(raw, list) and all(isinstance(item, (str, list)) for item in raw):
        return raw
    raise PlatformConfigError(f"{where}: valueField must be a name or a list of names")


def check_unique_destinations(files: List[FileConfig], where: str = "Platform") -> None:
    """Reject file configs that would write to the same destination."""
    seen = set()
    for file_config in files:
        if file_config.destination in seen:
            raise PlatformConfigError(f"{where}: duplicate destination '{file_config.destination}'")
        seen.add(file_config.destination)


def file_config_from_dict(d: Any, where: str = "file") -> FileConfig:
    if not isinstance(d, Mapping):
        raise PlatformConfigError(f"{where}: file entry must be a mapping")
    destination = d.get("destination")
    if not destination:
        raise PlatformConfigError(f"{where}: missing destination")
    return FileConfig(
        destination=destination,
        value_field=_value_field_from_config(_get(d, "valueField", "value_field"), where),
        format=d.get("format", "json"),
    )


def platform_from_dict(name: str, d: Any) -> Platform:
    """
    Build a Platform from its configuration mapping.

    Raises:
        PlatformConfigError: If fields are missing or have the wrong type
    """
    if d is None:
        d = {}
    if not isinstance(d, Mapping):
        raise PlatformConfigError(f"Platform '{name}' must be a mapping")

    fields = _get(d, "valueTransformFields", "value_transform_fields", DEFAULT_VALUE_TRANSFORM_FIELDS)
    if (
        not isinstance(fields, list)
        or not fields
        or not all(isinstance(f, str) for f in fields)
    ):
        raise PlatformConfigError(
            f"Platform '{name}': valueTransformFields must be a non-empty list of names"
        )

    files_raw = d.get("files", [])
    if not isinstance(files_raw, list):
        raise PlatformConfigError(f"Platform '{name}': files must be a list")
    files: List[FileConfig] = [
        file_config_from_dict(f, where=f"Platform '{name}' files[{i}]")
        for i, f in enumerate(files_raw)
    ]
    check_unique_destinations(files, where=f"Platform '{name}'")

    return Platform(name=name, value_transform_fields=list(fields), files=files)


def platforms_from_dict(d: Any) -> Dict[str, Platform]:
    if not isinstance(d, Mapping):
        raise PlatformConfigError("Platform config must be a mapping")
    platforms = d.get("platforms")
    if not isinstance(platforms, Mapping):
        raise PlatformConfigError("Platform config must define a 'platforms' mapping")
    return {name: platform_from_dict(name, body) for name, body in platforms.items()}


def load_platform_config(path: str | Path) -> Dict[str, Platform]:
    """
    Load every platform defined in a YAML/JSON config file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        PlatformConfigError: If the content is invalid
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise FileNotFoundError(f"Platform config not found: {path}")

    try:
        doc = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise PlatformConfigError(f"Invalid platform config {path}: {e}") from e

    platforms = platforms_from_dict(doc)
    log.debug("Loaded %d platform(s) from %s", len(platforms), path)
    return platforms


__all__ = [
    "PlatformConfigError",
    "check_unique_destinations",
    "file_config_from_dict",
    "load_platform_config",
    "platform_from_dict",
    "platforms_from_dict",
]
