"""Bundled sample networks."""
