"""Seeded generative surface renderer: one hash in, one still frame out."""

__version__ = "0.1.0"
