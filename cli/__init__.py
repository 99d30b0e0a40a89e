"""
LECTIO - Command Line Interface

Terminal entry point for the parallel scripture reader.
"""
from cli.main import app, main

__all__ = ["app", "main"]
