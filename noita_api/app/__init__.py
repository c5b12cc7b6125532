"""
Application package initializer.

The project is organised by layer: ``core`` (configuration, database,
security, errors, logging), ``schemas`` (pydantic models), ``validation``
(payload rules), ``services`` (business logic) and ``api`` (versioned
routers).  Each domain (posts, concerts, carousel) has a module in
every layer.
"""

from .main import app  # noqa: F401
