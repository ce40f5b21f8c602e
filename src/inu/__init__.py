"""
inu: use dogbin and hastebin right from your terminal.

A small client for paste servers speaking the hastebin protocol or its
dogbin extension (custom slugs, URL pastes, view counts).
"""

__version__ = "0.1.3"
