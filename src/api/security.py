# This file implements the admin / leader / parishioner authorization model.
# Admins are listed on the Admins tab; leaders are the organizer emails on the Ministries tab.
# Every protected service call resolves the requester into an Identity and asks the policy for access.
# Failed checks raise PermissionDenied, which renders as a 403 UNAUTHORIZED error body.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from src.api.error_handlers import APIError
from src.workbook.base import Workbook, cell
from src.workbook.layout import (
    ADMINS_SHEET,
    MINISTRIES_SHEET,
    MINISTRY_ID_COL,
    MINISTRY_NAME_COL,
    MINISTRY_ORGANIZER_EMAIL_COL,
    normalize_email,
)

ROLE_ADMIN = "admin"
ROLE_LEADER = "leader"
ROLE_NONE = "none"


class PermissionDenied(APIError):
    """Raised when a requester lacks the role an operation needs."""

    def __init__(self, message: str = "Unauthorized", *, details: Any | None = None) -> None:
        super().__init__(status_code=403, error_code="UNAUTHORIZED", message=message, details=details)


@dataclass(frozen=True)
class Identity:
    email: str
    roles: frozenset[str] = frozenset()
    ministries: tuple[dict[str, str], ...] = field(default_factory=tuple)

    def has_role(self, role: str) -> bool:
        return role in self.roles

    @property
    def is_admin(self) -> bool:
        return self.has_role(ROLE_ADMIN)

    @property
    def is_leader(self) -> bool:
        return self.has_role(ROLE_LEADER)

    @property
    def role(self) -> str:
        if self.is_admin:
            return ROLE_ADMIN
        if self.is_leader:
            return ROLE_LEADER
        return ROLE_NONE

    def ministry_ids(self) -> set[str]:
        return {ministry["id"] for ministry in self.ministries}

    def ministry_names(self) -> set[str]:
        return {ministry["name"] for ministry in self.ministries}

    def leads(self, ministry_id: str) -> bool:
        return ministry_id in self.ministry_ids()


class AccessPolicy:
    """Role lookups and access checks against one workbook."""

    def __init__(self, workbook: Workbook) -> None:
        self.workbook = workbook

    def is_admin(self, email: str | None) -> bool:
        normalized = normalize_email(email)
        if not normalized:
            return False
        sheet = self.workbook.worksheet(ADMINS_SHEET)
        if sheet is None:
            return False
        return any(normalize_email(cell(row, 0)) == normalized for row in sheet.get_all_values()[1:])

    def leader_ministries(self, email: str | None) -> list[dict[str, str]]:
        normalized = normalize_email(email)
        if not normalized:
            return []
        sheet = self.workbook.worksheet(MINISTRIES_SHEET)
        if sheet is None:
            return []
        return [
            {"id": cell(row, MINISTRY_ID_COL), "name": cell(row, MINISTRY_NAME_COL)}
            for row in sheet.get_all_values()[1:]
            if normalize_email(cell(row, MINISTRY_ORGANIZER_EMAIL_COL)) == normalized
        ]

    def identify(self, email: str | None) -> Identity:
        roles: set[str] = set()
        if self.is_admin(email):
            roles.add(ROLE_ADMIN)
        ministries = self.leader_ministries(email)
        if ministries:
            roles.add(ROLE_LEADER)
        return Identity(email=normalize_email(email), roles=frozenset(roles), ministries=tuple(ministries))

    def verify_admin(self, email: str | None) -> dict[str, bool]:
        return {"isAdmin": self.is_admin(email)}

    def verify_user(self, email: str | None) -> dict[str, Any]:
        identity = self.identify(email)
        return {
            "role": identity.role,
            "isAdmin": identity.is_admin,
            "isLeader": identity.is_leader,
            "ministries": list(identity.ministries),
        }

    def require_admin(self, email: str | None) -> Identity:
        identity = self.identify(email)
        if not identity.is_admin:
            raise PermissionDenied()
        return identity

    def require_admin_or_leader(self, email: str | None) -> Identity:
        if not normalize_email(email):
            raise PermissionDenied()
        identity = self.identify(email)
        if not (identity.is_admin or identity.is_leader):
            raise PermissionDenied()
        return identity

    def require_ministry_access(self, email: str | None, ministry_id: str) -> Identity:
        """Admins reach every ministry; leaders only the ones they organize."""

        identity = self.identify(email)
        if identity.is_admin or identity.leads(ministry_id):
            return identity
        raise PermissionDenied()

    def require_response_access(self, email: str | None, ministry_id: str | None) -> Identity:
        if not normalize_email(email):
            raise PermissionDenied()
        if ministry_id:
            return self.require_ministry_access(email, ministry_id)
        return self.require_admin_or_leader(email)
