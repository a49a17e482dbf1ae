"""Minimal version helper for the circular_slider package."""

from importlib import metadata
from pathlib import Path

PACKAGE_NAME = "circular-slider"


def get_version() -> str:
    """
    Get version for the package.

    A source checkout asks setuptools_scm, an installed copy reads its
    distribution metadata.

    :return: Version number.
    """
    try:  # dev checkout
        import setuptools_scm  # type: ignore[import-untyped]

        return str(setuptools_scm.get_version(root=str(Path(__file__).parents[2])))
    except (ImportError, LookupError):
        pass
    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = ["get_version"]
