"""
dalgona.services._shared.ports
==============================

Hexagonal interfaces between the services and the outside world.

Modules
-------
- :mod:`identity_provider`: :class:`~.IdentityProvider`, creates login identities.
- :mod:`record_store`: :class:`~.RecordStore`, insert/select over named collections.
- :mod:`navigator`: :class:`~.Navigator`, sends the client to the next screen.
- :mod:`token_provider`: :class:`~.TokenProvider`, issues and decodes JWTs.
- :mod:`denylist_store`: :class:`~.TokenDenylistStore`, revoked access tokens.

Concrete adapters live under ``dalgona.infra``.
"""

from __future__ import annotations

from .denylist_store import InMemoryDenylistStore, TokenDenylistStore
from .identity_provider import DUPLICATE_ACCOUNT_MESSAGE, AccountPayload, IdentityProvider
from .navigator import Navigator, RecordingNavigator
from .record_store import RecordStore, Row, RowFilter
from .token_provider import TokenProvider

__all__ = [
    "AccountPayload",
    "DUPLICATE_ACCOUNT_MESSAGE",
    "IdentityProvider",
    "InMemoryDenylistStore",
    "Navigator",
    "RecordStore",
    "RecordingNavigator",
    "Row",
    "RowFilter",
    "TokenDenylistStore",
    "TokenProvider",
]
