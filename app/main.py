from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.routers.rebalance import router as rebalance_router
from .api.routers.ticks import router as ticks_router
from .shared.config import get_settings

logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)

app = FastAPI(title="LP Rebalance API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(rebalance_router)
app.include_router(ticks_router)


@app.get("/health")
def health():
    return {"status": "ok"}
