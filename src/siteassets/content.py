from __future__ import annotations

from pathlib import Path

from siteassets.config import SiteConfig


def content_extensions(config: SiteConfig) -> set[str]:
    extensions = {extension.lstrip(".").lower() for extension in config.content_extensions}
    output_extension = config.output_extension.lstrip(".").lower()
    if output_extension:
        extensions.add(output_extension)
    return extensions


def is_content_file(path: Path, config: SiteConfig) -> bool:
    """True for files rendered by the site generator rather than copied."""
    return path.suffix.lstrip(".").lower() in content_extensions(config)
