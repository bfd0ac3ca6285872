"""Version management for Mezzanine."""

import re
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

# Build-time version constant (injected during packaging)
__BUILD_VERSION__ = None


def get_version() -> str:
    """
    Get the current version.

    First tries the build-time constant, then installed package metadata, then
    pyproject.toml for source checkouts.

    Returns:
        str: Version string
    """
    if __BUILD_VERSION__:
        return __BUILD_VERSION__

    try:
        return version("mezzanine")
    except PackageNotFoundError:
        pass

    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
    try:
        if pyproject_path.exists():
            content = pyproject_path.read_text(encoding='utf-8')
            # Look for version = "x.y.z" pattern (including PEP 440 prereleases)
            match = re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE)
            if match and re.match(r'^\d+\.\d+\.\d+(a\d+|b\d+|rc\d+)?$', match.group(1)):
                return match.group(1)
    except OSError:
        pass

    return "unknown"


__version__ = get_version()
