"""jobrank: learn which occupations you prefer, one pair at a time."""

__version__ = "0.1.0"
