"""Top-level package for the photo combiner.

Provides subpackages:
- photo_combiner.layout – page layout engine (grid and shelf packing)
- photo_combiner.images – input selection and decoding
- photo_combiner.output – PNG/PDF page rendering
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
        except OSError:
            content = ""
        for line in content.splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.1.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("photo-combiner")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__copyright__ = "Copyright 2026 Timothy Carpenter Licensed under the Polyform Noncommercial License 1.0.0"
__all__: list[str] = ["__version__"]
