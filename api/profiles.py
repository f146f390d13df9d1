import uuid

from fastapi import APIRouter

from schemas.profile import ProfileCreate

router = APIRouter(prefix="/api/profiles", tags=["profiles"])


@router.post("", status_code=201)
async def create_profile(body: ProfileCreate):
    """Accepts a camelCase payload (converted by middleware); responds in camelCase."""
    profile_id = f"prof-{uuid.uuid4().hex[:12]}"
    return {"id": profile_id, **body.model_dump()}
