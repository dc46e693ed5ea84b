"""FastAPI application - day planner."""

from fastapi import FastAPI

from backend.app.api.routes.activities import router as activities_router
from backend.app.api.routes.health import router as health_router
from backend.app.api.routes.metrics import router as metrics_router
from backend.app.api.routes.plans import router as plans_router

app = FastAPI(title="Day Planner API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(plans_router)
app.include_router(activities_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Day Planner API", "version": "0.1.0"}
