from fastapi import APIRouter

from api.routes import auth, health_metrics, supplements, symptoms

api_router = APIRouter()

api_router.include_router(auth.router, tags=["auth"])
api_router.include_router(symptoms.router, tags=["symptoms"])
api_router.include_router(supplements.router, tags=["supplements"])
api_router.include_router(health_metrics.router, tags=["health-metrics"])
