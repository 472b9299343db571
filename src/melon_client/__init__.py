"""Melon Client: a Minecraft launcher front-end."""

__version__ = "1.1.0"
