"""Main FastAPI application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.coach_routes import router as coach_router
from api.entry_routes import router as entry_router
from api.friend_routes import router as friend_router
from api.goal_routes import router as goal_router
from api.insight_routes import router as insight_router
from api.routes import router
from config.settings import settings
from models.database import close_mongo_connection, init_mongo
from utils.logger import quiet_library_loggers, setup_logger

logger = setup_logger(__name__)
quiet_library_loggers()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup/shutdown events."""
    # Startup
    logger.info("Starting application...")
    await init_mongo()  # Connect to MongoDB and create indexes
    logger.info("Application started successfully")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    await close_mongo_connection()
    logger.info("Application shut down")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Daily tasks, journaling, goals and AI coaching reports",
    lifespan=lifespan,
)

# Local frontend dev servers plus configured origins
frontend_origins = [
    "http://localhost:5173",  # Vite default
    "http://127.0.0.1:5173",
    "http://localhost:3000",
    "http://127.0.0.1:3000",
] + settings.cors_origins

# Remove duplicates while preserving order
unique_origins = list(dict.fromkeys(frontend_origins))

logger.info(f"CORS configured with origins: {unique_origins}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=unique_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    # Export filename and fallback marker are read by the browser
    expose_headers=["Content-Disposition", "X-Export-Fallback"],
    max_age=600,
)


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    """Log every request with its response status."""
    response = await call_next(request)
    logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
    return response


# Include API routes
app.include_router(router)
app.include_router(entry_router)
app.include_router(goal_router)
app.include_router(insight_router)
app.include_router(coach_router)
app.include_router(friend_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "NeuroTrack API",
        "version": settings.app_version,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": settings.app_name,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
