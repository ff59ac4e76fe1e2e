"""Utility packages for tablegroups (logging, events)."""
