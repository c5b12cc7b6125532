"""
Top-level package for the Noïta API.

The package provides no public exports; all functionality lives in
submodules under ``app``, imported by fully qualified names such as
``noita_api.app.main``.
"""

__all__ = []
