import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from chessfed.config import get_settings
from chessfed.database import init_db
from chessfed.routers import (
    players_router, tournaments_router,
    pairings_router, utils_router
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: Create database tables
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    description="Nigerian Chess Federation - Swiss Tournament Pairing and Standings",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS middleware - production-aware
CORS_ORIGINS = (
    ["*"] if not settings.is_production() else [
        "https://chessfed.ng",
        "https://www.chessfed.ng",
    ]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(players_router)
app.include_router(tournaments_router)
app.include_router(pairings_router)
app.include_router(utils_router)


@app.get("/")
async def root():
    return {
        "name": settings.app_name,
        "description": "Nigerian Chess Federation Tournament System",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
