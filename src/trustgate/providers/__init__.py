"""Concrete provider adapters for the trust evaluator.

- ``static``: ``StaticNetwork``, an in-memory network description loaded
  from YAML, implementing every data provider contract.
- ``verifier``: ``ContentHashVerifier``, an integrity-level envelope check.
- ``node``: ``NodeTrustAdapter``, reads trust data from a node's JSON API
  (requires the optional ``httpx`` dependency).
"""

from trustgate.providers.static import StaticIdentity, StaticNetwork
from trustgate.providers.verifier import ContentHashVerifier

__all__ = [
    "ContentHashVerifier",
    "StaticIdentity",
    "StaticNetwork",
]
