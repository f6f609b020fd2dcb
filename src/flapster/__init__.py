"""FLAPSTER - a single-screen flapping arcade game."""

__version__ = "0.1.0"
