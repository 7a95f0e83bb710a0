"""
utils/ - Shared Helpers
=======================
Logging setup, the exception hierarchy and upload reading.
No dependencies on repositories or services.
"""
