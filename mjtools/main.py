from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException

from mjtools.config import settings
from mjtools.errors import InvalidTileCountError, MahjongError
from mjtools.hand_scoring import score
from mjtools.notation import build_agari_context, format_tiles, parse_kinds
from mjtools.schemas import ScoreRequest, ScoreResponse, ShantenRequest, ShantenResponse
from mjtools.shanten import chiitoitsu_shanten, effective_tiles, kokushi_shanten, normal_shanten

logger = logging.getLogger(__name__)

app = FastAPI(title="Mahjong Shanten and Score API", version="0.1.0")


@app.get("/")
def root() -> dict[str, str]:
    return {
        "message": "Mahjong Shanten and Score API",
        "docs": "/docs",
        "health": "/health",
    }


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/api/v1/shanten", response_model=ShantenResponse)
def shanten_endpoint(req: ShantenRequest) -> ShantenResponse:
    try:
        kinds = parse_kinds(req.hand)
        if not 1 <= len(kinds) <= 14:
            raise InvalidTileCountError(f"Hand must contain 1 to 14 tiles (got {len(kinds)})")
        normal = normal_shanten(kinds)
        chiitoitsu = chiitoitsu_shanten(kinds)
        kokushi = kokushi_shanten(kinds)
        effective = effective_tiles(kinds, req.variant) if len(kinds) % 3 == 1 else []
    except MahjongError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    return ShantenResponse(
        shanten=min(normal, chiitoitsu, kokushi),
        normal=normal,
        chiitoitsu=chiitoitsu,
        kokushi=kokushi,
        effective_tiles=[format_tiles([kind]) for kind in effective],
    )


@app.post("/api/v1/score", response_model=ScoreResponse)
def score_endpoint(req: ScoreRequest) -> ScoreResponse:
    try:
        ctx = build_agari_context(req.hand, req.context)
        result = score(ctx, req.rules or settings.rule_config())
    except MahjongError as exc:
        logger.info("Rejected score request: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return ScoreResponse(status="ok", result=result)
