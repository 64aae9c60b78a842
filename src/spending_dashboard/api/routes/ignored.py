import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from spending_dashboard.api.dependencies import get_service
from spending_dashboard.api.schemas import IgnoreCategoryRequest, IgnoredCategoriesResponse
from spending_dashboard.manager import DashboardService

router = APIRouter(prefix="/api/ignored-categories")


@router.get("", response_model=IgnoredCategoriesResponse)
async def list_ignored(
    service: Annotated[DashboardService, Depends(get_service)],
) -> IgnoredCategoriesResponse:
    return IgnoredCategoriesResponse(ignored_categories=list(service.state.ignored_categories))


@router.post("", response_model=IgnoredCategoriesResponse)
async def add_ignored(
    req: IgnoreCategoryRequest,
    service: Annotated[DashboardService, Depends(get_service)],
) -> IgnoredCategoriesResponse:
    changed = await asyncio.to_thread(service.add_ignored_category, req.category)
    return IgnoredCategoriesResponse(
        ignored_categories=list(service.state.ignored_categories),
        changed=changed,
    )


@router.delete("/{category:path}", response_model=IgnoredCategoriesResponse)
async def remove_ignored(
    category: str,
    service: Annotated[DashboardService, Depends(get_service)],
) -> IgnoredCategoriesResponse:
    changed = await asyncio.to_thread(service.remove_ignored_category, category)
    return IgnoredCategoriesResponse(
        ignored_categories=list(service.state.ignored_categories),
        changed=changed,
    )
