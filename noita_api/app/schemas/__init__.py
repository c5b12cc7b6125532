"""
Pydantic schema definitions for API payloads.

Each domain (posts, concerts, carousel) defines its own request and
response models.  Request models keep every field optional and typed
as plain strings: required-ness, lengths and formats are checked by the
validators in ``validation`` so that problems are reported as field
errors in the response envelope instead of framework-level 422s.
"""
