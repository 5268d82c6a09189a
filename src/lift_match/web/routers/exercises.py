"""Exercise matching and availability routes."""

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...models.matching import ExerciseMetadata

router = APIRouter(prefix="/exercises", tags=["exercises"])


class MatchRequest(BaseModel):
    name: str | None = None
    names: list[str] | None = None
    category: str | None = None
    equipment: list[str] | str | None = None
    primary_muscles: list[str] | None = None
    secondary_muscles: list[str] | None = None
    difficulty: str | None = None

    def metadata(self) -> ExerciseMetadata | None:
        meta = ExerciseMetadata.from_dict(self.model_dump(exclude={"name", "names"}))
        return None if meta.is_empty() else meta


def get_services(request: Request):
    """Get the wired repositories and matcher from app state."""
    return request.app.state.services


@router.post("/match")
async def match_exercise(body: MatchRequest, request: Request):
    """Resolve one name, or a list of names, against the catalog."""
    matcher = get_services(request).matcher
    meta = body.metadata()

    if body.names is not None:
        results = await matcher.match_many(body.names, [meta] * len(body.names))
        return {
            "results": [
                {"input": name, **result.to_dict()} for name, result in zip(body.names, results)
            ]
        }

    result = await matcher.match_exercise(body.name or "", meta)
    return result.to_dict()


@router.get("/available")
async def available_exercises(request: Request, user_id: str, gym_id: str | None = None):
    """Exercises the user can perform with their equipment."""
    entries = await get_services(request).equipment_resolver.available_for_user(user_id, gym_id)
    return {"exercises": [entry.to_dict() for entry in entries], "count": len(entries)}
