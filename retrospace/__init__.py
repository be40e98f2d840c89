"""Retrospace: social-profile network persistence and visibility layer."""

__version__ = "1.0.0"
