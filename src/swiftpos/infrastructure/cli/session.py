"""Per-invocation context shared by every CLI command.

The store is built lazily, once, and only after the access gate has let
the command through.
"""

from __future__ import annotations

import logging

import click

from swiftpos.application.data_store import DataStore
from swiftpos.domain.service.access_gate import AccessGate, SessionClaim
from swiftpos.infrastructure import bootstrap
from swiftpos.infrastructure.config import Settings

logger = logging.getLogger(__name__)


class AppContext:

    def __init__(self, settings: Settings, claim: SessionClaim | None) -> None:
        self.settings = settings
        self.claim = claim
        self._gate = AccessGate()
        self._store: DataStore | None = None

    @property
    def store(self) -> DataStore:
        if self._store is None:
            self._store = bootstrap.data_store(self.settings)
        return self._store

    def authorize(self, path: str) -> None:
        """Stop the command unless the gate lets ``path`` through."""
        decision = self._gate.check(path, self.claim)
        if decision.allowed:
            return
        logger.info("Access to %s redirected to %s", path, decision.redirect_to)
        raise click.ClickException(
            f"Access to {path} denied, redirected to {decision.redirect_to}"
        )
