"""devpurge - find and remove regenerable build and dependency folders."""

__version__ = "0.1.0"
