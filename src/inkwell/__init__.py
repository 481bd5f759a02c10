"""Inkwell — browse, search and curate a collection of poems and quotes."""

__version__ = "0.1.0"
