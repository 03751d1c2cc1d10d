from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from microvillas.config import settings
from microvillas.api.routes import router
from microvillas.services.cache import scenario_cache

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Micro Villas Subdivision Engine",
    description=(
        "Partition a land parcel into a centered social club and residential "
        "lots across allocation percentages, then price the selected scenario."
    ),
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)


@app.get("/")
async def root():
    return {
        "name": "Micro Villas Subdivision Engine",
        "version": "1.0.0",
        "endpoints": {
            "api_docs": "/docs",
            "health": "/health",
            "scenarios": "POST /api/scenarios",
            "default_scenario": "GET /api/scenarios/default?width=...&height=...",
            "clear_cache": "DELETE /api/scenarios/cache",
            "financial_analysis": "POST /api/financial-analysis",
            "recalculate": "POST /api/financial-analysis/recalculate",
            "amenities": "GET /api/amenities",
            "social_club_design": "POST /api/social-club/design",
        },
    }


@app.get("/health")
async def health():
    return {
        "status": "healthy",
        "version": "1.0.0",
        "cached_parcels": len(scenario_cache),
    }
