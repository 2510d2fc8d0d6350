"""Test utilities for stooge applications::

    from stooge.testing import TestClient
"""

from stooge.testing.client import ClientResponse, TestClient

__all__ = [
    "ClientResponse",
    "TestClient",
]
