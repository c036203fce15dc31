"""
Shared error handling package.

Renders CallError raised outside of a callable endpoint with the same
JSON error envelope.
"""
