"""
Integration tests for the composed entry points.

The CSS build command is a real shell command writing a stylesheet, so these
tests exercise the whole chain end to end on a sample project.
"""
import asyncio
import sys

import pytest

from buildflow.exceptions import CommandError
from buildflow.pipelines import build, watch
from buildflow.tasks import BuildContext

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="POSIX shell commands")

CSS_BUILD = "mkdir -p static/css && printf '.a  {  color : red ;  }\\n' > static/css/style.css"


@pytest.fixture
def build_settings(settings):
    return settings.model_copy(update={"css_build_command": CSS_BUILD})


class TestBuild:
    """Tests for the build pipeline."""

    @pytest.mark.asyncio
    async def test_step_order(self, build_settings):
        ctx = BuildContext(settings=build_settings)

        await build(ctx)

        assert ctx.step_names() == [
            "clean",
            "sync-resource-file",
            "sync-asset-files",
            "compile-css",
            "optimize-css",
        ]
        assert all(r.status == "succeeded" for r in ctx.trace)

    @pytest.mark.asyncio
    async def test_output_tree(self, build_settings):
        ctx = BuildContext(settings=build_settings)

        await build(ctx)

        output = build_settings.output_path
        assert not (output / "old.txt").exists()
        assert not (output / "js" / "stale.js").exists()
        assert (output / "yarn.lock").exists()
        assert (output / "node_modules" / "electron" / "index.js").exists()
        assert (output / "index.html").exists()
        assert (output / "img" / "logo.png").exists()
        assert (output / "js" / "excalidraw-assets" / "vendor-abc.js").exists()
        assert not list((output / "js" / "excalidraw-assets").rglob("i18n-*.js"))
        assert build_settings.stylesheet_path.read_text().strip().startswith(".a{")

    @pytest.mark.asyncio
    async def test_css_failure_stops_build(self, build_settings):
        settings = build_settings.model_copy(update={"css_build_command": "exit 2"})
        ctx = BuildContext(settings=settings)

        with pytest.raises(CommandError) as exc_info:
            await build(ctx)

        assert exc_info.value.returncode == 2
        assert "optimize-css" not in ctx.step_names()
        statuses = {r.name: r.status for r in ctx.trace}
        assert statuses["compile-css"] == "failed"
        assert statuses["build"] == "failed"


class TestWatch:
    """Tests for the watch pipeline."""

    @pytest.mark.asyncio
    async def test_initial_sync_then_watchers(self, settings):
        settings = settings.model_copy(update={"css_watch_command": "sleep 30"})
        ctx = BuildContext(settings=settings)

        task = asyncio.create_task(watch(ctx))
        await asyncio.sleep(0.3)

        public = settings.public_static_path
        assert (public / "index.html").exists()
        assert not (public / "node_modules").exists()

        # A compiled file change is mirrored into public/static
        (settings.output_path / "js" / "main.js").write_text("compiled")
        for _ in range(100):
            if (public / "js" / "main.js").exists():
                break
            await asyncio.sleep(0.02)

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await asyncio.wait_for(task, timeout=10)

        assert (public / "js" / "main.js").read_text() == "compiled"
        names = ctx.step_names()
        assert names[:3] == ["sync-resource-file", "sync-asset-files", "sync-all-static"]
        assert {"keep-sync-resource-file", "watch-css", "keep-sync-static-in-runtime"} <= set(names)
        assert "sync-js-css-in-runtime" in names

    @pytest.mark.asyncio
    async def test_css_watch_failure_cancels_watchers(self, settings):
        settings = settings.model_copy(update={"css_watch_command": "exit 1"})
        ctx = BuildContext(settings=settings)

        with pytest.raises(CommandError):
            await asyncio.wait_for(watch(ctx), timeout=10)

        statuses = {r.name: r.status for r in ctx.trace}
        assert statuses["keep-sync-resource-file"] == "cancelled"
        assert statuses["keep-sync-static-in-runtime"] == "cancelled"
