"""Bundled exercise catalog data."""
