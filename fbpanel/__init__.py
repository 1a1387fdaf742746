"""Configuration trees, a plugin registry and toolkit-free applet logic for a desktop panel."""

__version__ = "7.0"