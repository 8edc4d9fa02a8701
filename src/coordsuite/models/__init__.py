"""
Data models and schemas.

Submodules are imported directly (``coordsuite.models.coordinates``,
``coordsuite.models.geodesy``, ...) since the point models depend on the
core exception hierarchy.
"""
