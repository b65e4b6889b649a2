"""Deterministic falling-objects scene renderer."""

__version__ = "0.1.0"
