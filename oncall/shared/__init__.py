"""
Shared module package.

Contains cross-cutting concerns for apps hosting callable endpoints:
- Error handling and mapping
- Logging configuration
"""
