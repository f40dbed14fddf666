"""Top-level package for the exam toolkit.

Provides subpackages:
- exam_toolkit.core – question and selection data models, errors
- exam_toolkit.selection – the question selection engine
"""

def _get_version() -> str:
    """Get version from importlib.metadata (installed) or pyproject.toml (dev)."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    from pathlib import Path

    try:
        return pkg_version("exam-toolkit")
    except PackageNotFoundError:
        pass

    # Source checkout without install: read pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.1.0"
                return line.split("=")[1].strip().strip('"').strip("'")
    return "0.0.0"

__version__ = _get_version()
__copyright__ = "Copyright 2026 The exam-toolkit authors. Licensed under the MIT License"
__all__: list[str] = ["__version__"]
