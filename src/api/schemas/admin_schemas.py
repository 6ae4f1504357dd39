# This file defines admin roster and role verification schemas.
# It exists so role checks used by the admin console have explicit response contracts.

from __future__ import annotations

from src.api.schemas.common import CamelModel, CellText, EnvelopeFields


class AdminRowV1(CamelModel):
    email: str
    name: str = ""
    added_date: str = ""


class AdminListResponseV1(EnvelopeFields):
    data: list[AdminRowV1]


class AdminInput(CamelModel):
    email: CellText = ""
    name: CellText = ""
    admin_email: CellText = ""


class LedMinistryV1(CamelModel):
    id: str
    name: str


class VerifyAdminV1(CamelModel):
    is_admin: bool


class VerifyAdminResponseV1(EnvelopeFields):
    data: VerifyAdminV1


class VerifyUserV1(CamelModel):
    role: str
    is_admin: bool
    is_leader: bool
    ministries: list[LedMinistryV1]


class VerifyUserResponseV1(EnvelopeFields):
    data: VerifyUserV1
