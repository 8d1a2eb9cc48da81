"""Compile HTML templates with embedded C++ code into C++ rendering classes."""

__version__ = "1.0.0"