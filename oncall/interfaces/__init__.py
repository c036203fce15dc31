"""
Interface layer package.

HTTP-facing pieces of a callable endpoint: the JSON envelope codec,
content negotiation, CORS headers and the dispatcher itself.
"""
