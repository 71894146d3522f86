"""Multi-criteria preference scoring for tire catalogs."""

__version__ = "0.1.0"
