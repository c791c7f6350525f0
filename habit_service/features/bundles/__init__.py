"""Curated habit bundles."""
