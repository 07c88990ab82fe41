"""Customer domain exceptions.

Raised by the Service Layer; the API layer (Views) catches these and
translates them into HTTP responses.
"""

from __future__ import annotations


class CustomerNotFound(Exception):
    """The requested customer does not exist (or was deleted)."""
