"""
Payload validation.

Each domain module exposes ``sanitize_*`` (trim every string field)
and ``validate_*`` functions returning a ``ValidationResult``.  The
functions are pure: they never touch storage and report every problem
they find instead of stopping at the first one.
"""
