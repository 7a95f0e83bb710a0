"""
security/ - Credentials and Authorization
==========================================
Password digests and the per-operation authorization policy.
"""
