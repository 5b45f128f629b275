"""
Polling file watcher.

Takes (mtime, size) snapshots of one or more directory trees and calls a
callback whenever a snapshot differs from the previous one. The initial
snapshot never triggers the callback. A failing callback is logged and the
watch goes on; the loop has no stop condition of its own and ends only when
its task is cancelled.
"""
import asyncio
import inspect
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, Iterable

from .fs import iter_files

logger = logging.getLogger("buildflow.watcher")

Snapshot = dict[Path, tuple[int, int]]


def take_snapshot(roots: Iterable[Path], exclude: Iterable[str] = ()) -> Snapshot:
    """
    Record modification time and size for every file under the given roots.

    Missing roots contribute nothing. Files that disappear while scanning are
    skipped.
    """
    exclude = list(exclude)
    snapshot: Snapshot = {}
    for root in roots:
        for rel_file in iter_files(root, exclude):
            path = root / rel_file
            try:
                stat = path.stat()
            except FileNotFoundError:
                continue
            snapshot[path] = (stat.st_mtime_ns, stat.st_size)
    return snapshot


def diff_snapshots(old: Snapshot, new: Snapshot) -> set[Path]:
    """Return the paths added, removed or modified between two snapshots."""
    changed = set(old.keys() ^ new.keys())
    changed.update(p for p in old.keys() & new.keys() if old[p] != new[p])
    return changed


async def watch(
    roots: Iterable[Path],
    callback: Callable[[set[Path]], Awaitable[Any] | Any],
    interval: float = 0.5,
    exclude: Iterable[str] = (),
) -> None:
    """
    Watch directory trees and invoke callback with the changed paths.

    Args:
        roots: Directories to watch (they may not exist yet)
        callback: Sync or async callable receiving the set of changed paths
        interval: Seconds between polls
        exclude: Exclusion patterns (see buildflow.fs)
    """
    roots = list(roots)
    exclude = list(exclude)
    previous = take_snapshot(roots, exclude)
    logger.info(f"Watching {', '.join(str(r) for r in roots)} ({len(previous)} files)")

    while True:
        await asyncio.sleep(interval)

        current = take_snapshot(roots, exclude)
        changed = diff_snapshots(previous, current)
        previous = current

        if not changed:
            continue

        logger.debug(f"Detected {len(changed)} change(s)")
        try:
            result = callback(changed)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.exception(f"Change handler failed, still watching: {e}")
