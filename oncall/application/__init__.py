"""
Application layer package.

Contains the use cases the dispatcher orchestrates: caller
authentication and handler invocation.
"""
