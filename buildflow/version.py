"""Release version extraction and manifest stamping."""

import json
import logging
import re
from pathlib import Path
from typing import Any

from .exceptions import VersionNotFoundError

logger = logging.getLogger("buildflow.version")

# Runs of digits and dots; a run must hold at least one digit to count
VERSION_PATTERN = r"[0-9.]{3,}"


def extract_version(text: str, pattern: str = VERSION_PATTERN) -> str:
    """
    Extract the first version-like token from text.

    Dot-only runs such as an ellipsis are skipped, so "... v1.2.34 ..."
    yields "1.2.34".

    Args:
        text: Source text (e.g. contents of version.cljs)
        pattern: Regex matching the version token

    Returns:
        The first match containing a digit

    Raises:
        VersionNotFoundError: If no match contains a digit
    """
    for match in re.finditer(pattern, text):
        token = match.group(0)
        if any(c.isdigit() for c in token):
            return token

    raise VersionNotFoundError(f"No release version matching {pattern!r} found")


def read_version(path: Path, pattern: str = VERSION_PATTERN) -> str:
    """Read the release version out of a source file."""
    try:
        return extract_version(path.read_text(encoding="utf-8"), pattern)
    except VersionNotFoundError:
        raise VersionNotFoundError(f"Release version error in {path}") from None


def load_manifest(path: Path) -> dict[str, Any]:
    """Load a JSON packaging manifest."""
    return json.loads(path.read_text(encoding="utf-8"))


def write_manifest(path: Path, manifest: dict[str, Any]) -> None:
    """Write a manifest back with 2-space indentation."""
    path.write_text(json.dumps(manifest, indent=2, ensure_ascii=False), encoding="utf-8")


def stamp_manifest_version(
    manifest_path: Path,
    version_path: Path,
    pattern: str = VERSION_PATTERN,
) -> str:
    """
    Copy the release version from the version source into the manifest.

    The manifest is only rewritten once a version has been found.

    Returns:
        The version written
    """
    manifest = load_manifest(manifest_path)
    version = read_version(version_path, pattern)

    previous = manifest.get("version")
    manifest["version"] = version
    write_manifest(manifest_path, manifest)

    logger.info(f"Stamped {manifest_path.name} version: {previous} -> {version}")
    return version
