"""In-memory stub for AuthorizationProtocol.

Signed-in users get ``default_features``; the anonymous principal (None)
gets nothing unless granted explicitly.
"""

from __future__ import annotations

from uuid import UUID

from tabcoin.application.ports.authorization import UPDATE_CONTENT_ACTION


class AuthorizationStub:
    """Configurable feature table for tests.

    Attributes:
        _default_features: Features every signed-in principal holds.
        _granted: Extra features per principal.
        _revoked: Features removed per principal.
        _checks: Recorded (principal, action, resource) calls.
    """

    def __init__(
        self, default_features: frozenset[str] = frozenset({UPDATE_CONTENT_ACTION})
    ) -> None:
        self._default_features = default_features
        self._granted: dict[UUID | None, set[str]] = {}
        self._revoked: dict[UUID | None, set[str]] = {}
        self._checks: list[tuple[UUID | None, str, UUID]] = []

    async def can_perform(
        self, principal_id: UUID | None, action: str, resource_id: UUID
    ) -> bool:
        self._checks.append((principal_id, action, resource_id))
        if action in self._revoked.get(principal_id, set()):
            return False
        if action in self._granted.get(principal_id, set()):
            return True
        return principal_id is not None and action in self._default_features

    def grant(self, principal_id: UUID | None, action: str) -> None:
        self._revoked.get(principal_id, set()).discard(action)
        self._granted.setdefault(principal_id, set()).add(action)

    def revoke(self, principal_id: UUID | None, action: str) -> None:
        self._granted.get(principal_id, set()).discard(action)
        self._revoked.setdefault(principal_id, set()).add(action)

    def get_checks(self) -> list[tuple[UUID | None, str, UUID]]:
        return list(self._checks)
