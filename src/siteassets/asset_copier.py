from __future__ import annotations

from dataclasses import dataclass
from hashlib import sha256
import logging
import os
from pathlib import Path
import shutil
import stat
import tempfile
from typing import Callable

from siteassets.config import SiteConfig
from siteassets.content import is_content_file
from siteassets.ignore_engine import build_ignore_policy
from siteassets.models import CopyError, CopyStats


@dataclass(slots=True)
class CopyRunOptions:
    dry_run: bool = False



def _hash_file(path: Path) -> str:
    digest = sha256()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1024 * 1024), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _should_copy(source_file: Path, destination_file: Path, compare_by: str) -> bool:
    if compare_by == "always" or not destination_file.exists():
        return True

    source_stat = source_file.stat()
    destination_stat = destination_file.stat()

    if compare_by == "size":
        return source_stat.st_size != destination_stat.st_size

    if compare_by == "hash":
        if source_stat.st_size != destination_stat.st_size:
            return True
        return _hash_file(source_file) != _hash_file(destination_file)

    mtime_changed = int(source_stat.st_mtime) != int(destination_stat.st_mtime)
    size_changed = source_stat.st_size != destination_stat.st_size
    return mtime_changed or size_changed


def _safe_copy(source_file: Path, destination_file: Path) -> None:
    source_stat = source_file.stat()
    if destination_file.is_file() and not destination_file.stat().st_mode & stat.S_IWUSR:
        raise PermissionError(f"Destination '{destination_file}' exists but is read-only")

    destination_file.parent.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(delete=False, dir=str(destination_file.parent)) as tmp:
        tmp_path = Path(tmp.name)
    try:
        shutil.copyfile(source_file, tmp_path)
        os.utime(tmp_path, ns=(source_stat.st_atime_ns, source_stat.st_mtime_ns))
        tmp_path.replace(destination_file)
    finally:
        if tmp_path.exists():
            tmp_path.unlink(missing_ok=True)


def _relative_to(path: Path, root: Path) -> Path | None:
    try:
        return path.relative_to(root)
    except ValueError:
        return None


class AssetCopier:
    """Copies static assets and content-adjacent media into the output folder.

    Failures never abort a run: each one is logged, counted in ``stats`` and
    kept as a :class:`CopyError` readable through ``errors`` once the copy
    returns.
    """

    def __init__(
        self,
        config: SiteConfig,
        options: CopyRunOptions | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.config = config
        self.options = options or CopyRunOptions()
        self.log = logger or logging.getLogger("siteassets.copier")
        self.ignore_policy = build_ignore_policy(config)
        self.stats = CopyStats()
        self._errors: list[CopyError] = []

    @property
    def errors(self) -> list[CopyError]:
        return list(self._errors)

    def copy(self, source_root: Path | None = None) -> None:
        """Mirror ``source_root`` (the asset folder by default) into the destination."""
        root = self.config.asset_folder if source_root is None else Path(source_root)
        self._copy_tree(root, self.config.destination_folder, accept=lambda _path: True)

    def copy_assets_from_content(self, content_root: Path | None = None) -> None:
        """Copy every non-content file found under the content folder."""
        root = self.config.content_folder if content_root is None else Path(content_root)
        self._copy_tree(
            root,
            self.config.destination_folder,
            accept=lambda path: not is_content_file(path, self.config),
        )

    def copy_single_file(self, path: Path) -> None:
        path = Path(path)
        if path.is_dir():
            self.log.info("Skip copying single asset file [%s]. Is a directory.", path)
            return

        destination = self.config.destination_folder / self._asset_sub_path(path)
        self.log.info("Copying single asset file to [%s]", destination)
        self._copy_file(path, destination)

    def is_asset_file(self, path: Path) -> bool:
        asset_root = self.config.asset_folder.resolve()
        resolved = Path(path).resolve()
        if resolved == asset_root or _relative_to(resolved, asset_root) is None:
            return False
        return not self.ignore_policy.is_inside_ignored_folder(resolved, asset_root)

    def _asset_sub_path(self, path: Path) -> Path:
        resolved = path.resolve()
        for root in (self.config.asset_folder, self.config.content_folder):
            relative = _relative_to(resolved, root.resolve())
            if relative is not None:
                return relative
        return Path(path.name)

    def _record(self, source: Path, exc: OSError) -> None:
        self.stats.failed += 1
        self._errors.append(CopyError.from_exception(source, exc))

    def _is_ignored(self, path: Path, relative_path: Path, is_dir: bool) -> bool:
        try:
            return self.ignore_policy.is_ignored(path, relative_path, is_dir=is_dir)
        except OSError as exc:
            self.log.error("Unable to inspect [%s]: %s", path, exc)
            self._record(path, exc)
            return True

    def _copy_tree(self, root: Path, destination_root: Path, accept: Callable[[Path], bool]) -> None:
        if not root.is_dir():
            self.log.debug("Nothing to copy, [%s] is not a directory", root)
            return

        def on_walk_error(exc: OSError) -> None:
            failed_path = Path(exc.filename) if exc.filename else root
            self.log.error("Unable to list [%s]: %s", failed_path, exc)
            self._record(failed_path, exc)

        destination_resolved = destination_root.resolve()
        walker = os.walk(
            root,
            topdown=True,
            onerror=on_walk_error,
            followlinks=self.config.follow_symlinks,
        )
        for root_str, dirs, files in walker:
            current = Path(root_str)
            current_rel = current.relative_to(root)

            kept_dirs: list[str] = []
            for dir_name in sorted(dirs):
                # A destination nested in the source must not be copied into itself.
                if (current / dir_name).resolve() == destination_resolved:
                    self.log.debug("Skipping destination folder [%s]", current / dir_name)
                    continue
                if self._is_ignored(current / dir_name, current_rel / dir_name, is_dir=True):
                    self.log.debug("Skipping ignored folder [%s]", current / dir_name)
                    continue
                kept_dirs.append(dir_name)
            dirs[:] = kept_dirs

            for file_name in sorted(files):
                source_file = current / file_name
                rel_path = current_rel / file_name
                if self._is_ignored(source_file, rel_path, is_dir=False) or not accept(source_file):
                    self.stats.skipped += 1
                    continue
                self._copy_file(source_file, destination_root / rel_path)

    def _copy_file(self, source_file: Path, destination_file: Path) -> None:
        try:
            if not _should_copy(source_file, destination_file, compare_by=self.config.compare_by):
                self.stats.skipped += 1
                self.log.debug("Skipping unchanged [%s]", source_file)
                return

            if not self.options.dry_run:
                _safe_copy(source_file, destination_file)
            self.stats.copied += 1
            self.log.info("Copying [%s]... done!", source_file)
        except OSError as exc:
            self.log.error("Copying [%s]... failed! %s", source_file, exc)
            self._record(source_file, exc)
