"""Procedural maze with roulette-driven encounters."""

__version__ = "0.1.0"
