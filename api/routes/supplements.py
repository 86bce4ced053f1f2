from fastapi import APIRouter, status

from api.deps import AuthContextDep, DbDep
from schemas.common import MessageResponse
from schemas.supplement import SupplementCreate, SupplementResponse
from services.supplement_service import create_supplement, delete_supplement, list_supplements, mark_taken

router = APIRouter()


@router.get("/supplements", response_model=list[SupplementResponse])
def get_supplements(db: DbDep, ctx: AuthContextDep):
    return list_supplements(db, ctx.user_id)


@router.post("/supplements", response_model=SupplementResponse, status_code=status.HTTP_201_CREATED)
def post_supplement(payload: SupplementCreate, db: DbDep, ctx: AuthContextDep):
    return create_supplement(db, ctx.user_id, payload)


@router.post("/supplements/{supplement_id}/take", response_model=SupplementResponse)
def take_supplement(supplement_id: str, db: DbDep, ctx: AuthContextDep):
    return mark_taken(db, ctx.user_id, supplement_id)


@router.delete("/supplements/{supplement_id}", response_model=MessageResponse)
def remove_supplement(supplement_id: str, db: DbDep, ctx: AuthContextDep):
    delete_supplement(db, ctx.user_id, supplement_id)
    return MessageResponse(message="Supplement deleted")
