# portal/routers/ratings.py
from fastapi import APIRouter, Depends

from portal.schemas.rating import RatingIn
from portal.services.rating_service import create_rating
from portal.store import SupabaseStore, get_store

router = APIRouter()


@router.post("/rate", summary="Submit a rating")
async def rate(body: RatingIn, store: SupabaseStore = Depends(get_store)):
    await create_rating(store, body.session_id, body.stars, body.feedback)
    return {"ok": True}
