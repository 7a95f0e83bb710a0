"""
models/ - Domain Layer
======================
Plain dataclasses for every entity, plus the pure sort orders and
order-status filters that operate on already-loaded entities.
"""
