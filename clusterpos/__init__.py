"""Readers for Illumina cluster position files (locs and clocs)."""

__version__ = "0.1.0"
__all__ = ["posfile"]