"""Albumnote: a local photo and note manager with tag-indexed in-memory stores."""

__version__ = "0.1.0"
