"""Version information for samcompare."""

__version__ = "0.3.0"
__license__ = "GPL-2.0"
__description__ = "Concordance benchmarking of a test SAM mapping against a reference mapping"
