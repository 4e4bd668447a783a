"""Version management for git-const."""

from importlib import metadata
from pathlib import Path

import toml

# Build-time version constant (may be injected when packaging)
__BUILD_VERSION__ = None

DISTRIBUTION_NAME = "git-const"


def get_version() -> str:
    """
    Get the current version.

    Uses the build-time constant, then installed package metadata, then the
    source checkout's pyproject.toml.

    Returns:
        str: Version string, or "unknown"
    """
    if __BUILD_VERSION__:
        return __BUILD_VERSION__

    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        pass

    # Running from a source checkout without installation
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject_path.exists():
        try:
            data = toml.load(pyproject_path)
        except (OSError, toml.TomlDecodeError):
            return "unknown"
        return data.get("project", {}).get("version", "unknown")

    return "unknown"


__version__ = get_version()
