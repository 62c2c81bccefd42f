"""Eco Wardrobe: closet cataloging, outfit logging and mood-driven outfit ideas."""

__version__ = "1.0.0"
