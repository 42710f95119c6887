"""tokenctl — resolve and validate design token trees."""

__version__ = "0.3.0"
