from fastapi import APIRouter
from weatherlog.api.routes import weather, history

# Create API router
api_router = APIRouter()

# Include all route modules
api_router.include_router(weather.router)
api_router.include_router(history.router)
