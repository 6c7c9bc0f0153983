"""
Services Package

Business logic kept separate from HTTP handling:

- store.py: Document-store style collections over the async SQLAlchemy engine
- aggregation.py: Concurrent fan-out/fan-in of independent lookups
- resources.py: Generic list/detail/delete flows with the integrity guard
- validation.py: Form validation and sanitization
"""
