"""samcompare: compare a test alignment against a target (reference) alignment."""

from samcompare.__version__ import __version__

__all__ = ["__version__"]
