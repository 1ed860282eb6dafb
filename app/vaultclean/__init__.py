"""vaultclean - find and remove empty folders and unreferenced files in a notes vault."""

__version__ = "0.1.0"
