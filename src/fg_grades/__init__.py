"""Top-level package for the .fg grade report toolkit.

Provides subpackages:
- fg_grades.core – hex container codec and the document models
- fg_grades.loading – markup parsing and schema normalization
- fg_grades.editing – single-cell grade edit rule and grade bands
- fg_grades.importing – roll-keyed reconciliation import from tabular data
- fg_grades.output – serialization back to the container format

Most hosts only need `GradeSession` from fg_grades.controller.
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text(encoding="utf-8")
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.1"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("fg-grades")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
