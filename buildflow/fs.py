"""
Filesystem primitives used by the build steps.

Exclusion patterns follow a small gitignore-like convention:
- ``i18n-*.js`` (no slash) matches a file or directory name at any depth
- ``js/vendor/*`` (contains a slash) matches the path relative to the source root
- ``/node_modules`` (leading slash) is anchored to the source root

An excluded directory is pruned with its whole subtree.
"""
import os
import shutil
import logging
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, Iterator

logger = logging.getLogger("buildflow.fs")


def is_excluded(rel_path: str, patterns: Iterable[str]) -> bool:
    """
    Check a POSIX-style relative path against exclusion patterns.

    Args:
        rel_path: Path relative to the source root, using '/' separators
        patterns: Exclusion patterns (see module docstring)

    Returns:
        True if any pattern matches
    """
    name = rel_path.rsplit("/", 1)[-1]
    for pattern in patterns:
        if pattern.startswith("/"):
            if fnmatch(rel_path, pattern[1:]):
                return True
        elif "/" in pattern:
            if fnmatch(rel_path, pattern):
                return True
        elif fnmatch(name, pattern):
            return True
    return False


def iter_files(root: Path, exclude: Iterable[str] = ()) -> Iterator[Path]:
    """
    Yield every file under root, relative to root, skipping excluded paths.

    Yields nothing if root does not exist.
    """
    exclude = list(exclude)
    if not root.is_dir():
        return

    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root)

        # Prune excluded directories in place so os.walk skips them
        dirnames[:] = sorted(
            d for d in dirnames
            if not is_excluded((rel_dir / d).as_posix(), exclude)
        )

        for filename in sorted(filenames):
            rel_file = rel_dir / filename
            if not is_excluded(rel_file.as_posix(), exclude):
                yield rel_file


def copy_tree(src: Path, dest: Path, exclude: Iterable[str] = ()) -> list[Path]:
    """
    Copy every file from src into dest, preserving relative structure.

    Existing files in dest are overwritten. A missing src copies nothing.

    Args:
        src: Source directory
        dest: Destination directory (created as needed)
        exclude: Exclusion patterns applied to paths relative to src

    Returns:
        List of destination files written
    """
    if not src.is_dir():
        logger.warning(f"Source directory not found, nothing to copy: {src}")
        return []

    copied = []
    for rel_file in iter_files(src, exclude):
        target = dest / rel_file
        target.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src / rel_file, target)
        copied.append(target)

    logger.info(f"Copied {len(copied)} file(s): {src} -> {dest}")
    return copied


def clean_directory(root: Path, keep: Iterable[str] = ()) -> list[Path]:
    """
    Delete everything inside root except the whitelisted paths.

    Kept paths are relative to root ('yarn.lock', 'node_modules', 'a/b').
    A kept directory survives with its whole subtree. Does nothing if root
    is missing or already empty.

    Returns:
        List of top-most paths removed
    """
    keep_set = {Path(k).as_posix().strip("/") for k in keep}
    removed: list[Path] = []

    if not root.is_dir():
        logger.debug(f"Nothing to clean, directory missing: {root}")
        return removed

    def _clean(directory: Path) -> None:
        for child in sorted(directory.iterdir()):
            rel = child.relative_to(root).as_posix()
            if rel in keep_set:
                continue

            # Descend into directories holding a kept path
            if child.is_dir() and not child.is_symlink() and any(
                k.startswith(rel + "/") for k in keep_set
            ):
                _clean(child)
                continue

            if child.is_dir() and not child.is_symlink():
                shutil.rmtree(child)
            else:
                child.unlink()
            removed.append(child)

    _clean(root)
    logger.info(f"Cleaned {root}: removed {len(removed)} path(s)")
    return removed
