"""FastAPI application entry point."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.routes import financing
from src.config import settings

logging.basicConfig(level=settings.log_level)

app = FastAPI(
    title=settings.api_title,
    description="SAC / Price amortization, balance reconciliation and early-payment simulation",
    version="0.1.0",
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(financing.router)


@app.get("/health")
async def health():
    return {"status": "ok"}
