"""
Core resolution logic.

The `StreamUrlResolver` wraps the API client and decides how failures are
surfaced: as a typed result, as a raised error, or collapsed into None.
"""
