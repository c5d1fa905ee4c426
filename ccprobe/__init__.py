"""Compiler capability probing: HAVE_* header and make fragment generation."""

__version__ = "1.0.0"
