"""
Version 1 of the API.

This subpackage bundles the user, product and metrics endpoints of the
first public version of the Catalog API.  Breaking changes belong in a
new version subpackage (e.g. ``v2``).
"""
