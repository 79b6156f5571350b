"""Bundled data files for richscan."""
