"""
Shared pytest fixtures for buildflow tests.

This module provides fixtures used across multiple test modules.
Fixtures are automatically discovered by pytest.
"""
import json
import sys
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Ensure project root is in path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


# =============================================================================
# Temporary Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    The directory is automatically cleaned up after the test.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_project(temp_dir: Path) -> Path:
    """
    Create a project tree shaped like the desktop shell repository.

    Layout:
        resources/                    static resources to stage
        node_modules/@excalidraw/...  third-party assets (with i18n bundles)
        src/main/frontend/version.cljs
        static/                       previous build output + lockfile + deps
    """
    root = temp_dir / "project"

    resources = root / "resources"
    (resources / "img").mkdir(parents=True)
    (resources / "index.html").write_text("<html><body>shell</body></html>")
    (resources / "img" / "logo.png").write_bytes(b"\x89PNG\r\n\x1a\n\x00\x01binary")
    (resources / "package.json").write_text(json.dumps({"name": "shell", "version": "0.0.1"}))

    assets = root / "node_modules" / "@excalidraw" / "excalidraw" / "dist" / "excalidraw-assets"
    (assets / "locales").mkdir(parents=True)
    (assets / "vendor-abc.js").write_text("console.log('vendor')")
    (assets / "Virgil.woff2").write_bytes(b"font")
    (assets / "i18n-en.js").write_text("// en")
    (assets / "locales" / "i18n-de-DE.js").write_text("// de")
    (assets / "locales" / "index.json").write_text("{}")

    version_file = root / "src" / "main" / "frontend" / "version.cljs"
    version_file.parent.mkdir(parents=True)
    version_file.write_text('(ns frontend.version)\n\n(defonce version "1.2.34")\n')

    static = root / "static"
    (static / "node_modules" / "electron").mkdir(parents=True)
    (static / "node_modules" / "electron" / "index.js").write_text("module.exports = {}")
    (static / "yarn.lock").write_text("# lockfile")
    (static / "js").mkdir()
    (static / "js" / "stale.js").write_text("old")
    (static / "old.txt").write_text("old")

    return root


# =============================================================================
# Configuration Fixtures
# =============================================================================

@pytest.fixture
def settings(sample_project: Path):
    """Settings pointing at the sample project, isolated from the environment."""
    from buildflow.config import Settings

    return Settings(
        _env_file=None,
        project_root=sample_project,
        css_build_command="true",
        css_watch_command="true",
        install_command="true",
        electron_dev_command="true",
        release_build_command="true",
        electron_make_command="true",
        watch_interval=0.05,
    )


@pytest.fixture
def build_context(settings):
    """A fresh BuildContext for one run."""
    from buildflow.tasks import BuildContext

    return BuildContext(settings=settings)


@pytest.fixture
def clear_settings_cache():
    """Clear the cached settings before and after a test."""
    from buildflow.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
