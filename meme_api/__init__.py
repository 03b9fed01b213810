"""Meme API: a small Flask service for storing memes behind token auth."""

__version__ = "0.1.0"
