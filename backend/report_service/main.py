"""
Task Report Service — FastAPI Application

This is the entry point for the report service. It:
1. Creates the FastAPI app instance
2. Configures CORS (so the task backend can call us)
3. Registers the report routes

Run with:
    uvicorn report_service.main:app --reload --port 8085
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from report_service.config import settings
from report_service.routers import reports


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown logic.

    Nothing to open or close: every report is built and discarded within
    its own request.
    """
    # --- Startup ---
    print(f"🚀 Starting {settings.BRAND_NAME} Report Service ({settings.APP_ENV})...")

    yield  # App is running, handling requests

    # --- Shutdown ---
    print("👋 Shutting down...")


app = FastAPI(
    title=f"{settings.BRAND_NAME} Report Service",
    description="Generates PDF and Excel reports from task-management data",
    version="1.0.0",
    lifespan=lifespan,
)

# --- CORS Middleware ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(reports.router)


@app.get("/", tags=["health"])
async def root():
    """Root endpoint — confirms the API is alive."""
    return {
        "service": f"{settings.BRAND_NAME} Report Service",
        "status": "running",
        "version": "1.0.0",
    }
