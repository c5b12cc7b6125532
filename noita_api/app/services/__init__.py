"""
Service layer.

Each domain module holds stateless functions that take an explicit
``sqlite3.Connection``.  Reads raise ``AppError`` subclasses; mutations
run inside a single write transaction and report expected failures as
a ``ServiceResult`` instead of raising.
"""
