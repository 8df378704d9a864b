"""Dependency-light helpers shared by the generator and its host (config IO, logging).

Nothing in this package may import `build_constants.framework` or `build_constants.app`.
"""
