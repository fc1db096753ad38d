"""
Persistence and export.

Components:
- snapshot.py: domain objects <-> JSON-compatible snapshot
- gateways.py: JSON file and SQLite key-value snapshot backends
- export.py: read-only export document
"""
