from __future__ import annotations
from fastapi import HTTPException, Request
from reservoir.services.reservoir import Reservoir

def get_reservoir(request: Request) -> Reservoir:
    reservoir = getattr(request.app.state, "reservoir", None)
    if reservoir is None:
        raise HTTPException(status_code=503, detail="Reservoir backend not initialised")
    return reservoir
