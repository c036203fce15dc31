"""
Domain layer package.

Contains the status taxonomy, the per-call context and the port
interfaces the dispatcher depends on. No framework imports, no IO.
"""
