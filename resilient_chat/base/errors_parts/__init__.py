"""Error taxonomy parts.

Prefer importing from `resilient_chat.base.errors` for the stable surface.
"""
