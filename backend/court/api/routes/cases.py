"""Case Routes — submission, listing, judge decisions, edit and delete.

Invariants:
    - Every route resolves a Principal first (get_principal)
    - Routes only translate HTTP <-> service calls; CaseLifecycle owns all rules
    - /by-name/{name} is declared before /{case_id} so it is never shadowed
"""

from fastapi import APIRouter, Depends, Query, status

from court.api.dependencies import get_case_lifecycle, get_principal
from court.core.domain_types import CaseId, CaseStatus, Principal
from court.schemas.case import (
    CaseEdit, CaseMutationResponse, CaseResponse, CaseSubmit,
)
from court.services.case_lifecycle import CaseLifecycle

router = APIRouter(prefix="/api/v1/cases", tags=["cases"])


@router.post(
    "", response_model=CaseMutationResponse,
    status_code=status.HTTP_201_CREATED,
)
async def submit_case(
    body: CaseSubmit,
    principal: Principal = Depends(get_principal),
    lifecycle: CaseLifecycle = Depends(get_case_lifecycle),
):
    """Submit a new case for judge approval."""
    case = await lifecycle.submit(
        principal, body.title, body.argument, body.evidence_text,
        evidence_file=body.evidence_file,
    )
    return CaseMutationResponse(
        message="Case submitted successfully (pending judge approval)",
        case=CaseResponse.from_record(case),
    )


@router.get("", response_model=list[CaseResponse])
async def list_cases(
    status_filter: CaseStatus | None = Query(None, alias="status"),
    principal: Principal = Depends(get_principal),
    lifecycle: CaseLifecycle = Depends(get_case_lifecycle),
):
    """List cases newest-first. Jurors only ever receive approved cases."""
    cases = await lifecycle.list_cases(principal, status_filter)
    return [CaseResponse.from_record(c) for c in cases]


@router.get("/by-name/{name}", response_model=list[CaseResponse])
async def list_cases_by_submitter(
    name: str,
    principal: Principal = Depends(get_principal),
    lifecycle: CaseLifecycle = Depends(get_case_lifecycle),
):
    """Juror search over approved cases by submitter name."""
    cases = await lifecycle.find_by_submitter_name(principal, name)
    return [CaseResponse.from_record(c) for c in cases]


@router.get("/{case_id}", response_model=CaseResponse)
async def get_case(
    case_id: int,
    principal: Principal = Depends(get_principal),
    lifecycle: CaseLifecycle = Depends(get_case_lifecycle),
):
    case = await lifecycle.get(principal, CaseId(case_id))
    return CaseResponse.from_record(case)


@router.patch("/{case_id}", response_model=CaseMutationResponse)
async def edit_case(
    case_id: int,
    body: CaseEdit,
    principal: Principal = Depends(get_principal),
    lifecycle: CaseLifecycle = Depends(get_case_lifecycle),
):
    """Judge-only partial update."""
    case = await lifecycle.edit(
        principal, CaseId(case_id), body.model_dump(exclude_unset=True),
    )
    return CaseMutationResponse(
        message="Case updated", case=CaseResponse.from_record(case),
    )


@router.post("/{case_id}/approve", response_model=CaseMutationResponse)
async def approve_case(
    case_id: int,
    principal: Principal = Depends(get_principal),
    lifecycle: CaseLifecycle = Depends(get_case_lifecycle),
):
    case = await lifecycle.approve(principal, CaseId(case_id))
    return CaseMutationResponse(
        message="Case approved", case=CaseResponse.from_record(case),
    )


@router.post("/{case_id}/reject", response_model=CaseMutationResponse)
async def reject_case(
    case_id: int,
    principal: Principal = Depends(get_principal),
    lifecycle: CaseLifecycle = Depends(get_case_lifecycle),
):
    case = await lifecycle.reject(principal, CaseId(case_id))
    return CaseMutationResponse(
        message="Case rejected", case=CaseResponse.from_record(case),
    )


@router.delete("/{case_id}")
async def delete_case(
    case_id: int,
    principal: Principal = Depends(get_principal),
    lifecycle: CaseLifecycle = Depends(get_case_lifecycle),
):
    """Delete a case and all of its votes."""
    await lifecycle.remove(principal, CaseId(case_id))
    return {"message": "Case deleted", "case_id": case_id}
