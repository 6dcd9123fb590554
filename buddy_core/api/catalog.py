"""
The complete operation catalog.

Importing this module registers every operation module with the shared
registry and checks that each entry in the access-rule table has a handler.
"""
from buddy_core.api import (  # noqa: F401  (imported for registration)
    associations,
    buddies,
    dashboard,
    meeting_notes,
    meetings,
    new_hires,
    tasks,
    users,
)
from buddy_core.api.dispatcher import registry
from buddy_core.api.permissions import OPERATION_RULES

_missing = sorted(set(OPERATION_RULES) - set(registry.names()))
if _missing:
    raise RuntimeError(f"Operations without handlers: {', '.join(_missing)}")

__all__ = ["registry"]
