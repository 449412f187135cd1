"""
Fake collaborators for testing.

Deterministic stand-ins for the provider HTTP clients so pipeline tests run
without network access.
"""

from fakes.providers import FakeChatClient, FakeRapidAPIClient

__all__ = [
    "FakeChatClient",
    "FakeRapidAPIClient",
]
