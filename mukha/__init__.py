"""Mukha: a knowledge-augmented chat backend."""

__version__ = "0.1.0"
