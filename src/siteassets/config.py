from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import json
import yaml


DEFAULT_CONTENT_EXTENSIONS = [
    "md",
    "markdown",
    "html",
    "htm",
    "ad",
    "adoc",
    "asciidoc",
]

COMPARE_MODES = {"always", "mtime+size", "size", "hash"}


@dataclass(slots=True)
class SiteConfig:
    source_folder: Path
    destination_folder: Path
    asset_folder: Path
    content_folder: Path
    output_extension: str = ".html"
    asset_ignore_hidden: bool = False
    excludes: list[str] = field(default_factory=list)
    content_extensions: list[str] = field(default_factory=lambda: list(DEFAULT_CONTENT_EXTENSIONS))
    compare_by: str = "always"
    follow_symlinks: bool = False

    @classmethod
    def for_source(cls, source_folder: Path, destination_folder: Path, **overrides: Any) -> "SiteConfig":
        """Build a config using the conventional ``assets``/``content`` layout."""
        values: dict[str, Any] = {
            "asset_folder": source_folder / "assets",
            "content_folder": source_folder / "content",
        }
        values.update(overrides)
        return cls(source_folder=source_folder, destination_folder=destination_folder, **values)


def _as_path(value: Any, field_name: str) -> Path:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"{field_name} must be a non-empty string path")
    return Path(value).expanduser()


def _as_folder(value: Any, field_name: str, default: str, base: Path) -> Path:
    path = _as_path(default if value is None else value, field_name)
    return path if path.is_absolute() else base / path


def _as_bool(value: Any, field_name: str, default: bool) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    raise ValueError(f"{field_name} must be a boolean")


def _as_list_of_strings(value: Any, field_name: str, default: list[str] | None = None) -> list[str]:
    if value is None:
        return list(default or [])
    if not isinstance(value, list) or any(not isinstance(item, str) for item in value):
        raise ValueError(f"{field_name} must be a list of strings")
    return [item for item in value if item.strip()]


def _as_extension(value: Any, field_name: str) -> str:
    if value is None:
        return ".html"
    if not isinstance(value, str) or not value.strip(".").strip():
        raise ValueError(f"{field_name} must be a non-empty string")
    return value if value.startswith(".") else f".{value}"


def _load_raw_config(config_path: Path) -> dict[str, Any]:
    if not config_path.exists():
        raise ValueError(f"Config file does not exist: {config_path}")

    suffix = config_path.suffix.lower()
    text = config_path.read_text(encoding="utf-8")
    if suffix in {".yml", ".yaml"}:
        loaded = yaml.safe_load(text)
    elif suffix == ".json":
        loaded = json.loads(text)
    else:
        raise ValueError("Config file must be .yaml/.yml or .json")

    if loaded is None:
        loaded = {}
    if not isinstance(loaded, dict):
        raise ValueError("Config root must be an object")
    return loaded


def load_config(config_path: Path) -> SiteConfig:
    raw = _load_raw_config(config_path)

    raw_source = raw.get("sourceFolder")
    if raw_source is None:
        source_folder = config_path.parent
    else:
        source_folder = _as_path(raw_source, "sourceFolder")
        if not source_folder.is_absolute():
            source_folder = config_path.parent / source_folder

    compare_by = raw.get("compareBy", "always")
    if not isinstance(compare_by, str) or compare_by not in COMPARE_MODES:
        raise ValueError(f"compareBy must be one of: {', '.join(sorted(COMPARE_MODES))}")

    content_extensions = [
        extension.lstrip(".").lower()
        for extension in _as_list_of_strings(
            raw.get("contentExtensions"), "contentExtensions", default=DEFAULT_CONTENT_EXTENSIONS
        )
    ]

    return SiteConfig(
        source_folder=source_folder,
        destination_folder=_as_folder(raw.get("destinationFolder"), "destinationFolder", "output", source_folder),
        asset_folder=_as_folder(raw.get("assetFolder"), "assetFolder", "assets", source_folder),
        content_folder=_as_folder(raw.get("contentFolder"), "contentFolder", "content", source_folder),
        output_extension=_as_extension(raw.get("outputExtension"), "outputExtension"),
        asset_ignore_hidden=_as_bool(raw.get("assetIgnoreHidden"), "assetIgnoreHidden", default=False),
        excludes=_as_list_of_strings(raw.get("excludes"), "excludes", default=[]),
        content_extensions=content_extensions,
        compare_by=compare_by,
        follow_symlinks=_as_bool(raw.get("followSymlinks"), "followSymlinks", default=False),
    )
