"""Compression level sweep benchmark for files shipped by installed packages."""

__version__ = "0.1.0"
