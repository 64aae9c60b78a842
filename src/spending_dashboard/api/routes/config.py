from typing import Any

from fastapi import APIRouter, HTTPException, Request

from spending_dashboard.core import configuration

router = APIRouter(prefix="/api")


@router.get("/config")
async def get_config() -> dict[str, Any]:
    return configuration.build_config_context()


@router.post("/config")
async def save_config(request: Request, values: dict[str, str]) -> dict[str, Any]:
    errors, updates = configuration.apply_config_updates(values)
    if errors:
        raise HTTPException(status_code=422, detail={"errors": errors})
    configuration.apply_runtime_updates(request.app, updates)
    return {
        "status": "saved",
        "updated": sorted(updates),
        **configuration.build_config_context(),
    }
