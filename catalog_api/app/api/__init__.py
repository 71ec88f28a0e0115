"""
API package containing versioned routes and shared dependencies.

A version subpackage such as ``v1`` exposes a top-level ``router``
which includes its resource endpoints; ``deps`` resolves the services
those endpoints use.
"""
