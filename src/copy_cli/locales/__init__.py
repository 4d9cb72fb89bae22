"""Bundled message catalogs."""
