"""Multilingual dictionary web service with one word table per language."""

__version__ = "1.0.0"
