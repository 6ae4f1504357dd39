# This file maps the single-endpoint web-app action vocabulary onto the service layer.
# It exists so front ends built against the single-endpoint `?action=` contract keep working unchanged.
# Every outcome is a plain JSON body: GET failures are `{error}`, POST failures `{success: false, error}`.
# The workbook is opened lazily so AI actions work even when no spreadsheet is configured.

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from pydantic import ValidationError

from src.api.error_handlers import APIError
from src.api.schemas.admin_schemas import AdminInput
from src.api.schemas.ai_schemas import (
    ApiKeyInput,
    ColumnAnalysisInput,
    DomainLookupInput,
    EnrichInput,
    SignupSheetInput,
)
from src.api.schemas.followup_schemas import FollowupQuestionsInput, FollowupResponseInput
from src.api.schemas.ministry_schemas import MinistryInput
from src.api.schemas.signup_schemas import DEFAULT_SIGNUP_ACTION, SignupInput
from src.api.security import AccessPolicy, PermissionDenied
from src.api.services.admin_service import AdminService
from src.api.services.ai_service import AiService
from src.api.services.followup_service import FollowupService
from src.api.services.ministry_service import MinistryService
from src.api.services.signup_service import SignupService
from src.common.timefmt import Clock
from src.workbook.base import Workbook, WorkbookUnavailableError
from src.workbook.layout import MINISTRIES_SHEET

logger = logging.getLogger(__name__)

ADMIN_ONLY_ACTIONS = frozenset(
    {"addMinistry", "updateMinistry", "deleteMinistry", "addAdmin", "removeAdmin", "saveFollowupQuestions"}
)


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', 'invalid value')}" if location else str(first.get("msg"))


class LegacyDispatcher:
    def __init__(
        self,
        *,
        open_workbook: Callable[[], Workbook],
        timezone: str,
        clock: Clock | None,
        ai_service: AiService,
    ) -> None:
        self._open_workbook = open_workbook
        self._workbook: Workbook | None = None
        self.timezone = timezone
        self.clock = clock
        self.ai = ai_service

    @property
    def workbook(self) -> Workbook:
        if self._workbook is None:
            self._workbook = self._open_workbook()
        return self._workbook

    def _services(self) -> dict[str, Any]:
        workbook = self.workbook
        policy = AccessPolicy(workbook)
        stamp = {"workbook": workbook, "timezone": self.timezone, "clock": self.clock, "policy": policy}
        return {
            "policy": policy,
            "ministries": MinistryService(workbook=workbook, policy=policy),
            "signups": SignupService(**stamp),
            "admins": AdminService(**stamp),
            "followups": FollowupService(**stamp),
        }

    # GET

    def handle_get(self, params: Mapping[str, str]) -> dict[str, Any]:
        try:
            return self._dispatch_get(params)
        except (APIError, WorkbookUnavailableError) as exc:
            return {"error": getattr(exc, "message", str(exc))}
        except Exception as exc:
            logger.exception("Legacy GET action=%s failed", params.get("action"))
            return {"error": str(exc)}

    def _dispatch_get(self, params: Mapping[str, str]) -> dict[str, Any]:
        services = self._services()
        policy: AccessPolicy = services["policy"]
        action = params.get("action") or "getMinistries"
        email = params.get("email")

        if action == "verifyAdmin":
            return policy.verify_admin(email)
        if action == "verifyUser":
            return policy.verify_user(email)
        if action == "scanSheets":
            return services["ministries"].scan_sheets()
        if action == "getMinistries":
            return services["ministries"].list_ministries(params.get("sheet") or MINISTRIES_SHEET)
        if action == "getSignups":
            return {"signups": services["signups"].list_signups(email)}
        if action == "getLeaderSignups":
            return {"signups": services["signups"].list_leader_signups(email)}
        if action == "getNewParishioners":
            return {"newParishioners": services["signups"].list_new_parishioners(email)}
        if action == "getAdmins":
            return {"admins": services["admins"].list_admins(email)}
        if action == "getFollowupQuestions":
            return services["followups"].get_questions(params.get("ministryId"))
        if action == "getFollowupResponses":
            return {"responses": services["followups"].list_responses(email, params.get("ministryId"))}
        return services["ministries"].list_ministries(MINISTRIES_SHEET)

    # POST

    def handle_post(self, data: Any) -> dict[str, Any]:
        if not isinstance(data, dict):
            return {"success": False, "error": "Request body must be a JSON object"}
        try:
            return self._dispatch_post(data)
        except (APIError, WorkbookUnavailableError) as exc:
            return {"success": False, "error": getattr(exc, "message", str(exc))}
        except ValidationError as exc:
            return {"success": False, "error": _first_error(exc)}
        except Exception as exc:
            logger.exception("Legacy POST failed")
            return {"success": False, "error": str(exc)}

    def _dispatch_post(self, data: dict[str, Any]) -> dict[str, Any]:
        if data.get("adminAction"):
            return self._dispatch_admin(data)

        action = data.get("action") or DEFAULT_SIGNUP_ACTION
        if action == "store-api-key":
            self.ai.store_api_key(ApiKeyInput.model_validate(data).api_key)
            return {"success": True}
        if action == "check-api-key":
            return self.ai.check_api_key()
        if action == "ai-lookup":
            return {"success": True, "result": self.ai.lookup_domain(DomainLookupInput.model_validate(data))}
        if action == "ai-analyze":
            return {"success": True, "result": self.ai.analyze_columns(ColumnAnalysisInput.model_validate(data))}
        if action == "ai-parse-signups":
            return {"success": True, "result": self.ai.parse_signups(SignupSheetInput.model_validate(data))}
        if action == "ai-enrich":
            return {"success": True, "result": self.ai.enrich(EnrichInput.model_validate(data))}

        services = self._services()
        if action == "submitFollowupResponse":
            services["followups"].submit_response(FollowupResponseInput.model_validate(data))
        else:
            services["signups"].record_signup(SignupInput.model_validate(data))
        return {"success": True}

    def _dispatch_admin(self, data: dict[str, Any]) -> dict[str, Any]:
        services = self._services()
        policy: AccessPolicy = services["policy"]
        admin_action = data.get("adminAction")
        requester = str(data.get("adminEmail") or "")

        if admin_action in ADMIN_ONLY_ACTIONS and not policy.is_admin(requester):
            if admin_action != "saveFollowupQuestions":
                raise PermissionDenied()
            ministry_id = str(data.get("ministryId") or "")
            if not any(ministry["id"] == ministry_id for ministry in policy.leader_ministries(requester)):
                raise PermissionDenied()

        if admin_action == "addMinistry":
            services["ministries"].add_ministry(requester, MinistryInput.model_validate(data))
        elif admin_action == "updateMinistry":
            payload = MinistryInput.model_validate(data)
            services["ministries"].update_ministry(requester, payload.id, payload)
        elif admin_action == "deleteMinistry":
            services["ministries"].delete_ministry(requester, MinistryInput.model_validate(data).id)
        elif admin_action == "addAdmin":
            payload = AdminInput.model_validate(data)
            services["admins"].add_admin(requester, payload.email, payload.name)
        elif admin_action == "removeAdmin":
            services["admins"].remove_admin(requester, AdminInput.model_validate(data).email)
        elif admin_action == "saveFollowupQuestions":
            payload = FollowupQuestionsInput.model_validate(data)
            services["followups"].save_questions(requester, payload.ministry_id, payload.rounds)
        else:
            return {"success": False, "error": "Unknown admin action"}
        return {"success": True}
