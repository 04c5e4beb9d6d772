from __future__ import annotations

import os
from pathlib import Path
import stat
from typing import Iterable

import pathspec

from siteassets.config import SiteConfig


IGNORE_MARKER = ".siteignore"


def is_hidden(path: Path) -> bool:
    if path.name.startswith("."):
        return True
    attributes = getattr(os.stat(path, follow_symlinks=False), "st_file_attributes", 0)
    return bool(attributes & getattr(stat, "FILE_ATTRIBUTE_HIDDEN", 0))


def has_ignore_marker(directory: Path) -> bool:
    return (directory / IGNORE_MARKER).is_file()


class IgnorePolicy:
    """Per-path filter applied while walking an asset or content tree.

    Patterns use gitignore syntax and are matched against the path relative
    to the traversal root, so ``drafts/`` prunes every ``drafts`` folder.
    """

    def __init__(self, patterns: Iterable[str], ignore_hidden: bool = False) -> None:
        self._spec = pathspec.GitIgnoreSpec.from_lines(patterns)
        self.ignore_hidden = ignore_hidden

    def matches_pattern(self, relative_path: Path, is_dir: bool = False) -> bool:
        unix_path = relative_path.as_posix()
        candidate = f"{unix_path}/" if is_dir and not unix_path.endswith("/") else unix_path
        return self._spec.match_file(candidate)

    def is_ignored(self, path: Path, relative_path: Path, is_dir: bool = False) -> bool:
        if self.ignore_hidden and is_hidden(path):
            return True
        if is_dir and has_ignore_marker(path):
            return True
        return self.matches_pattern(relative_path, is_dir=is_dir)

    def is_inside_ignored_folder(self, path: Path, root: Path) -> bool:
        """Check the ancestors of ``path`` up to ``root`` for an ignore marker."""
        for parent in path.parents:
            if has_ignore_marker(parent):
                return True
            if parent == root:
                break
        return False


def build_ignore_policy(config: SiteConfig) -> IgnorePolicy:
    patterns: list[str] = []
    patterns.extend(config.excludes)
    patterns.append(IGNORE_MARKER)
    return IgnorePolicy(patterns, ignore_hidden=config.asset_ignore_hidden)
