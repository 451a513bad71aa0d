from __future__ import annotations

from fastapi import FastAPI

from pokernight.api.games import router as games_router
from pokernight.config import get_settings, setup_logging

setup_logging(get_settings().log_level)

app = FastAPI(title="Poker Night Ledger API")
app.include_router(games_router)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
