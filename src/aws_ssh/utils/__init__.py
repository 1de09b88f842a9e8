"""Utility modules for config loading, display and SSH config rendering."""
