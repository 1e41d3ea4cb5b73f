"""Directory listing layer.

This module enumerates dataset directories through a local filesystem
or object-store backend and returns one sorted, filtered view.
"""
