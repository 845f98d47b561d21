"""
Version information for travel-inquiry
"""
from pathlib import Path
import tomllib


def get_version() -> str:
    """Read the project version from pyproject.toml

    Returns:
        Version string, or "unknown" when pyproject.toml is not available
    """
    try:
        pyproject_path = Path(__file__).parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
        return data["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return "unknown"


__version__ = get_version()
