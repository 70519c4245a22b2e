"""Volunteer intake API for the Onakpa Emmanuel Foundation."""

__version__ = "0.1.0"
