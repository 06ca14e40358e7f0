"""Bundled data files for foldersync."""
