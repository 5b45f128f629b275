"""
Electron steps: dependency install, development launch and release packaging.

All Electron commands run inside the build output directory (static/),
which holds the shell's own package.json and node_modules.
"""
import logging

from .process import run_command
from .tasks import BuildContext, series, step
from .version import stamp_manifest_version

logger = logging.getLogger("buildflow.electron")


@step("install-dependencies", "Install shell dependencies if node_modules is missing")
async def install_dependencies(ctx: BuildContext) -> None:
    settings = ctx.settings
    if settings.dependency_path.exists():
        logger.debug(f"Dependencies present: {settings.dependency_path}")
        return

    logger.info(f"{settings.dependency_path} not found, installing dependencies")
    await run_command(settings.install_command, cwd=settings.output_path)


@step("electron-dev", "Launch the desktop shell in development mode")
async def electron_dev(ctx: BuildContext) -> None:
    settings = ctx.settings
    await run_command(settings.electron_dev_command, cwd=settings.output_path)


@step("release-build", "Compile the release build of the application")
async def release_build(ctx: BuildContext) -> None:
    settings = ctx.settings
    await run_command(settings.release_build_command, cwd=settings.project_root)


@step("stamp-version", "Write the release version into the shell manifest")
async def stamp_version(ctx: BuildContext) -> None:
    settings = ctx.settings
    stamp_manifest_version(
        settings.manifest_path,
        settings.version_path,
        settings.version_pattern,
    )


@step("electron-make", "Package the desktop application")
async def electron_make(ctx: BuildContext) -> None:
    settings = ctx.settings
    await run_command(settings.electron_make_command, cwd=settings.output_path)


electron = series(
    install_dependencies,
    electron_dev,
    name="electron",
    description="Install dependencies if needed and launch the desktop shell",
)

electron_maker = series(
    release_build,
    stamp_version,
    install_dependencies,
    electron_make,
    name="electron-maker",
    description="Build, version-stamp and package the desktop application",
)
