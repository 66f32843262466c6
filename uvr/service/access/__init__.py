"""
Access
------

The persistence port. Each module wraps the queries for one
entity so that the managers never build ORM queries themselves.
Records are soft-deleted: ``deactivate`` and ``reactivate`` flip
the status flag and nothing is ever physically removed.
"""
