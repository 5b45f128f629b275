"""
Filesystem build steps: cleaning the output and syncing static files.

Layout (defaults, see buildflow.config):
    resources/            -> static/
    node_modules/.../excalidraw-assets -> static/js/excalidraw-assets
    static/ (minus node_modules)       -> public/static/
"""
import logging

from . import fs
from .tasks import BuildContext, step
from .watcher import watch

logger = logging.getLogger("buildflow.steps")


@step("clean", "Remove build output, keeping the lockfile and dependencies")
async def clean(ctx: BuildContext) -> None:
    settings = ctx.settings
    fs.clean_directory(settings.output_path, keep=settings.clean_keep_list)


@step("sync-resource-file", "Copy resources/ into the build output")
async def sync_resource_file(ctx: BuildContext) -> None:
    settings = ctx.settings
    fs.copy_tree(settings.resources_path, settings.output_path)


@step("sync-asset-files", "Copy third-party assets into the build output")
async def sync_asset_files(ctx: BuildContext) -> None:
    settings = ctx.settings
    fs.copy_tree(
        settings.asset_source_path,
        settings.asset_target_path,
        exclude=settings.asset_exclude_list,
    )


@step("sync-all-static", "Copy the whole build output into public/static")
async def sync_all_static(ctx: BuildContext) -> None:
    settings = ctx.settings
    fs.copy_tree(
        settings.output_path,
        settings.public_static_path,
        exclude=["/" + settings.dependency_dir],
    )


@step("sync-js-css-in-runtime", "Copy compiled js/ and css/ into public/static")
async def sync_js_css_in_runtime(ctx: BuildContext) -> None:
    settings = ctx.settings
    for subdir in ("js", "css"):
        fs.copy_tree(settings.output_path / subdir, settings.public_static_path / subdir)


@step("keep-sync-resource-file", "Re-sync resources/ whenever it changes")
async def keep_sync_resource_file(ctx: BuildContext) -> None:
    settings = ctx.settings

    async def on_change(changed):
        logger.info(f"{len(changed)} resource file(s) changed")
        await sync_resource_file(ctx)

    await watch([settings.resources_path], on_change, interval=settings.watch_interval)


@step("keep-sync-static-in-runtime", "Re-sync js/ and css/ whenever they change")
async def keep_sync_static_in_runtime(ctx: BuildContext) -> None:
    settings = ctx.settings
    roots = [settings.output_path / "js", settings.output_path / "css"]

    async def on_change(changed):
        logger.info(f"{len(changed)} compiled file(s) changed")
        await sync_js_css_in_runtime(ctx)

    await watch(roots, on_change, interval=settings.watch_interval)
