"""Pixel mapping for chained HUB75 LED panels and driver-chip initialisation sequences."""

__version__ = "0.1.0"
__all__ = ["coords", "virtual_panel", "legacy_panel", "leddrivers"]