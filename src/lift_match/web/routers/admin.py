"""Admin routes for the unmapped review queue."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(prefix="/admin", tags=["admin"])


class AliasRequest(BaseModel):
    exercise_id: str


class NewExerciseRequest(BaseModel):
    canonical_name: str
    localized_name: str | None = None
    external_id: str | None = None


def get_queue(request: Request):
    return request.app.state.services.review_queue


@router.get("/unmapped")
async def list_unmapped(request: Request):
    """Pending unmapped names, most frequent first."""
    pending = await get_queue(request).list_pending()
    return {"unmapped": [entry.to_dict() for entry in pending], "count": len(pending)}


@router.post("/unmapped/cleanup")
async def cleanup_unmapped(request: Request):
    """Drop pending names that now resolve."""
    removed = await get_queue(request).cleanup()
    return {"removed": removed}


@router.post("/unmapped/{entry_id}/alias")
async def resolve_with_alias(entry_id: int, body: AliasRequest, request: Request):
    """Alias a pending name to an existing exercise."""
    target = await get_queue(request).resolve_with_alias(entry_id, body.exercise_id)
    return {"success": True, "exercise": target.to_dict()}


@router.post("/unmapped/{entry_id}/exercise", status_code=201)
async def resolve_with_new_exercise(entry_id: int, body: NewExerciseRequest, request: Request):
    """Create a new exercise from a pending name."""
    entry = await get_queue(request).resolve_with_new_exercise(
        entry_id,
        body.canonical_name,
        localized_name=body.localized_name,
        external_id=body.external_id,
    )
    return {"success": True, "exercise": entry.to_dict()}


@router.delete("/unmapped/{entry_id}")
async def reject_unmapped(entry_id: int, request: Request):
    """Reject a pending name."""
    await get_queue(request).reject(entry_id)
    return {"success": True}
