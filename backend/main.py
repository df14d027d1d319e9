"""
Drift Annotator Backend - FastAPI Application Entry Point
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from routers import config, editors, logs, selection
from services.config_manager import ConfigManager
from services.session import AnnotationSession


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager - startup and shutdown logic"""
    print("[Backend] Starting Drift Annotator Backend...")
    config_manager = ConfigManager.get_instance()
    print(f"[Backend] ConfigManager initialized ({config_manager.config_file})")

    app.state.session = AnnotationSession.from_config(config_manager.get_config())
    source = config_manager.get_config().get("baseline", {}).get("source", "git")
    print(f"[Backend] AnnotationSession initialized with baseline source: {source}")

    yield
    # Shutdown: Cleanup
    app.state.session.close()
    print("[Backend] Shutting down Drift Annotator Backend...")


app = FastAPI(
    title="Drift Annotator Backend",
    description="Projects analysis result locations onto edited documents for IDE annotations",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware for IDE plugin communication
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # IDE plugin runs locally
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(logs.router, prefix="/api/logs", tags=["logs"])
app.include_router(selection.router, prefix="/api/selection", tags=["selection"])
app.include_router(editors.router, prefix="/api/editors", tags=["editors"])
app.include_router(config.router, prefix="/api/config", tags=["config"])


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "drift-annotator-backend"}


if __name__ == "__main__":
    import uvicorn

    server = ConfigManager.get_instance().get_config().get("server", {})
    uvicorn.run(app, host=server.get("host", "127.0.0.1"), port=server.get("port", 8000))
