"""Assignment endpoints — bulk auto-assign and the rule catalog."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from assignment_desk.application.use_cases.auto_assign import AutoAssignUseCase
from assignment_desk.application.use_cases.manage_rules import ManageRulesUseCase
from assignment_desk.domain.errors import NotFoundError
from assignment_desk.domain.value_objects.enums import OutcomeStatus
from assignment_desk.infrastructure.api.dependencies import (
    get_auto_assign_uc,
    get_manage_rules_uc,
)
from assignment_desk.infrastructure.api.serializers import (
    serialize_decision,
    serialize_rule,
)

router = APIRouter(prefix="/assignment", tags=["assignment"])


class RuleToggleRequest(BaseModel):
    enabled: bool


@router.post("/auto")
async def auto_assign(
    auto_uc: AutoAssignUseCase = Depends(get_auto_assign_uc),
):
    """Auto-assign every new query in arrival order."""
    result = await auto_uc.execute()

    return {
        "status": "ok",
        "total_processed": len(result.outcomes),
        "assigned": result.count(OutcomeStatus.ASSIGNED),
        "no_match": result.count(OutcomeStatus.NO_MATCH),
        "skipped": result.count(OutcomeStatus.SKIPPED),
        "results": [
            {
                "query_id": o.query_id,
                "status": o.status.value,
                "detail": o.detail,
                "decision": serialize_decision(o.decision) if o.decision else None,
            }
            for o in result.outcomes
        ],
    }


@router.get("/rules")
async def list_rules(rules_uc: ManageRulesUseCase = Depends(get_manage_rules_uc)):
    """Rules in evaluation order."""
    rules = await rules_uc.list_rules()
    return {"rules": [serialize_rule(r) for r in rules]}


@router.patch("/rules/{rule_id}")
async def toggle_rule(
    rule_id: int,
    body: RuleToggleRequest,
    rules_uc: ManageRulesUseCase = Depends(get_manage_rules_uc),
):
    """Enable or disable a rule."""
    try:
        rule, previous = await rules_uc.set_enabled(rule_id, body.enabled)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return {**serialize_rule(rule), "previous": previous}
