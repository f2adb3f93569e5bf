"""
utils/ - Shared Helpers
=======================
Logging setup, identifier generation and date helpers used by every layer.
"""
