"""foldersync - periodic one-way directory mirroring.

Keeps a target directory tree identical to a source directory tree:
new entries are copied, changed files are overwritten and entries
missing from the source are deleted.
"""

__version__ = "0.1.0"
