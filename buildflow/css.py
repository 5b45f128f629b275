"""CSS build steps: compile with the external tool, then minify in place."""

import logging
from pathlib import Path

import rcssmin

from .process import run_command
from .tasks import BuildContext, series, step

logger = logging.getLogger("buildflow.css")


def minify_file(path: Path) -> tuple[int, int]:
    """
    Minify a stylesheet in place.

    Returns:
        (size before, size after) in bytes
    """
    source = path.read_text(encoding="utf-8")
    minified = rcssmin.cssmin(source)
    path.write_text(minified, encoding="utf-8")

    before, after = len(source.encode("utf-8")), len(minified.encode("utf-8"))
    logger.info(f"Minified {path.name}: {before} -> {after} bytes")
    return before, after


@step("compile-css", "Run the CSS build command")
async def compile_css(ctx: BuildContext) -> None:
    settings = ctx.settings
    await run_command(settings.css_build_command, cwd=settings.project_root)


@step("optimize-css", "Minify the compiled stylesheet for release")
async def optimize_css(ctx: BuildContext) -> None:
    minify_file(ctx.settings.stylesheet_path)


build_css = series(
    compile_css,
    optimize_css,
    name="build-css",
    description="Compile and minify the stylesheet",
)


@step("watch-css", "Run the CSS watch command until interrupted")
async def watch_css(ctx: BuildContext) -> None:
    settings = ctx.settings
    await run_command(settings.css_watch_command, cwd=settings.project_root)
