"""Test utilities for scribble applications.

::

    from scribble.testing import TestClient
"""

from scribble.testing.client import TestClient

__all__ = ["TestClient"]
