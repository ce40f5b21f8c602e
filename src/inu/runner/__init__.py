"""
CLI runner module.

Provides commands:
- put: Create a new paste (default command)
- get: Print the contents of a paste
- init: Write a default config file
"""

from .main import create_cli, main

__all__ = [
    "create_cli",
    "main",
]
