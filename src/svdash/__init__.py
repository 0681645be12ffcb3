from importlib.metadata import PackageNotFoundError, version

__all__ = ["__version__"]

try:
    __version__ = version("svdash")
except PackageNotFoundError:
    # Source checkout without an install
    __version__ = "0.0.0+dev"
