"""hexlines - rule and decision engine for the Yavalath hex connection game."""

__version__ = "0.1.0"
