"""Test fixtures for vshell.

This package provides reusable test fixtures:
- sessions: seed trees, shell sessions and session managers
- api: TestClient wiring with an injected SessionManager
"""
