"""Process the files in a watched directory into reports in an output directory."""

__version__ = "0.1.0"
__all__ = ["__version__"]