# settleup/main.py
# FastAPI entry point: healthcheck + ledger computation router.

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from settleup import config
from settleup.routers.ledger import router as ledger_router

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="SettleUp",
    description="Ledger settlement engine: net balances, settle-up plans, pairwise debts.",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ledger_router, prefix="/api/ledger", tags=["Ledger"])


@app.get("/")
def root():
    """Simple healthcheck."""
    return {"message": "SettleUp is running", "docs": "/docs"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("settleup.main:app", host="0.0.0.0", port=8000, reload=False)
