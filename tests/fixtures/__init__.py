"""Test fixtures for the virtual filesystem.

This package provides reusable test fixtures:
- core: Clocks, events, transports and filesystems
- api: TestClient wired to a fresh filesystem
"""
