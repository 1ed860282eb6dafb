"""Bundled data files for vaultclean."""
