"""Cluedo deduction engine, headless simulator and detective co-pilot."""

__version__ = "0.1.0"
