import logging
from contextlib import asynccontextmanager
from pathlib import Path
from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse
from retrospace.config import settings
from retrospace.core.log import configure_logging
from retrospace.database import init_db
from retrospace.api import api_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    configure_logging()
    await init_db()
    logger.info("Database initialized at %s", settings.database_url)
    
    yield
    
    logger.info("Shutting down")


app = FastAPI(
    title=settings.app_name,
    description="Retrospace data service: users, posts and messages as JSON documents",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # The client may be served from anywhere
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get(f"{settings.api_prefix}/health")
async def health_check():
    """Reachability probe; clients only look at the status code."""
    return {"status": "ok"}


# Include API routes
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/{full_path:path}", include_in_schema=False)
async def application_shell(full_path: str):
    """Serve the single-page client for every non-API path."""
    prefix = settings.api_prefix.strip("/")
    if full_path == prefix or full_path.startswith(f"{prefix}/"):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="API endpoint not found"
        )
    
    index = Path(settings.static_dir) / "index.html"
    if index.is_file():
        return FileResponse(index)
    return PlainTextResponse("Retrospace data service running. Frontend assets (index.html) not found.")


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=3001)
