"""
FastAPI Backend dla tilegrid (podgląd i debug algorytmów).

Endpoints:
    GET  /api/health             - health check
    GET  /api/prefabs            - lista prefabów z data/prefabs.yaml
    GET  /api/prefabs/{id}       - wiersze i pola prefaba
    POST /api/fov                - pole widzenia dla przesłanej mapy
    POST /api/path               - A* dla przesłanej mapy
    POST /api/distance-map       - mapa odległości (Dijkstra)

Uruchomienie:
    uvicorn api.main:app --reload
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from api.routers import prefabs, fov, paths

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    logger.info("tilegrid API starting")
    yield
    logger.info("tilegrid API shutting down")


app = FastAPI(
    title="tilegrid API",
    description="Hex grid algorithms: field of view, A*, Dijkstra maps, prefabs",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS - the debug viewer may be opened from file://
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routers
app.include_router(prefabs.router, prefix="/api", tags=["Prefabs"])
app.include_router(fov.router, prefix="/api", tags=["FOV"])
app.include_router(paths.router, prefix="/api", tags=["Paths"])


@app.get("/api/health")
async def health():
    """API health check."""
    return {"status": "healthy"}
