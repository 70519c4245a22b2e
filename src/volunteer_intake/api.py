from fastapi import APIRouter

from volunteer_intake.modules.volunteers import router as volunteers_router

api_router = APIRouter()

api_router.include_router(volunteers_router, tags=["Volunteers"])
