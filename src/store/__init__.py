"""Content access layer.

This module reads dataset files and assets from the configured content
root and exposes the high-level viewer SDK.
"""
