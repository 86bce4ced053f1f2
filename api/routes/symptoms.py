from fastapi import APIRouter, status

from api.deps import AuthContextDep, DbDep
from schemas.common import MessageResponse
from schemas.symptom import SymptomCreate, SymptomResponse
from services.symptom_service import create_symptom, delete_symptom, list_symptoms

router = APIRouter()


@router.get("/symptoms", response_model=list[SymptomResponse])
def get_symptoms(db: DbDep, ctx: AuthContextDep):
    return list_symptoms(db, ctx.user_id)


@router.post("/symptoms", response_model=SymptomResponse, status_code=status.HTTP_201_CREATED)
def post_symptom(payload: SymptomCreate, db: DbDep, ctx: AuthContextDep):
    return create_symptom(db, ctx.user_id, payload)


@router.delete("/symptoms/{symptom_id}", response_model=MessageResponse)
def remove_symptom(symptom_id: str, db: DbDep, ctx: AuthContextDep):
    delete_symptom(db, ctx.user_id, symptom_id)
    return MessageResponse(message="Symptom deleted")
