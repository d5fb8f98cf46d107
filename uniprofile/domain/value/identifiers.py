"""Strongly typed identifiers.

The identity provider owns the uid; the core only passes it around.
"""

from typing import NewType

UserId = NewType("UserId", str)
