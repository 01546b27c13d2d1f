"""Engine exceptions.

Validators never raise for bad icon content; these cover misuse of the
engine itself (unknown profiles, malformed rule tables).
"""

from __future__ import annotations


class ProfileError(ValueError):
    """A design profile could not be found or failed validation."""
