"""A small version control system that keeps a directory's history in .shallgit."""

__version__ = "0.1.0"
__all__ = ["__version__"]