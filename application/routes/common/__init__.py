"""
Common utilities for route handlers.

Provides shared functionality to reduce code duplication:
- Request validation
- Response formatting
- Error handlers
"""
