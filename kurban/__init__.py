"""Qurban drive management: participants, animals, portions, slaughter, distribution and payments."""

__version__ = "0.1.0"