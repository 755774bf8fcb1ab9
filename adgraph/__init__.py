"""Validation, identifiers, replication waits and lookups for directory groups, users, service principals and domains."""

__version__ = "0.1.0"