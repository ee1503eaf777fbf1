"""
Version information for nearscope.
"""
import importlib.metadata
import pathlib
import tomli

# Installed: the distribution metadata is authoritative
try:
    __version__ = importlib.metadata.version("nearscope")
except importlib.metadata.PackageNotFoundError:
    # Source checkout: read it from pyproject.toml
    try:
        path = pathlib.Path(__file__).parent.parent / "pyproject.toml"
        with path.open("rb") as f:
            data = tomli.load(f)
        __version__ = data["project"]["version"]
    except (FileNotFoundError, KeyError, tomli.TOMLDecodeError):
        __version__ = "0.1.0"
