"""
utils/ - Shared Helpers
=======================
Logging setup and JSON serialization helpers used by every other layer.
"""
