"""
services/ - Business Logic Layer
================================
Services fetch through the repositories, stitch the pieces together with
``services.assembly`` and enforce the rules the schema alone cannot.
"""
