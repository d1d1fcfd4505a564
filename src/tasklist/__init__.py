"""tasklist - a small persistent task list with a light/dark theme."""

__version__ = "0.1.0"
