"""Bundled data files for adactl."""
