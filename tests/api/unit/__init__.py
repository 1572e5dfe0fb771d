"""Unit tests for API components.

This package contains isolated unit tests for:
- Service settings
- Dependency injection
- Error handling
"""
