"""Composed entry points exposed on the command line."""

from .css import build_css, watch_css
from .electron import electron, electron_maker
from .steps import (
    clean,
    keep_sync_resource_file,
    keep_sync_static_in_runtime,
    sync_all_static,
    sync_asset_files,
    sync_resource_file,
)
from .tasks import TaskRegistry, parallel, series

watch = series(
    sync_resource_file,
    sync_asset_files,
    sync_all_static,
    parallel(keep_sync_resource_file, watch_css, keep_sync_static_in_runtime),
    name="watch",
    description="Sync static files, then keep syncing and recompiling CSS",
)

build = series(
    clean,
    sync_resource_file,
    sync_asset_files,
    build_css,
    name="build",
    description="Clean, sync static files and build minified CSS",
)


def register_all_tasks(registry: TaskRegistry) -> TaskRegistry:
    """Register the command-line entry points."""
    registry.add(clean)
    registry.add(build)
    registry.add(watch)
    registry.add(electron)
    registry.add(electron_maker, name="electron-package")

    return registry
