import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from spending_dashboard.api.dependencies import get_service
from spending_dashboard.api.schemas import TransactionsResponse
from spending_dashboard.manager import DashboardService
from spending_dashboard.models import DashboardView

router = APIRouter(prefix="/api")


@router.get("/dashboard", response_model=DashboardView)
async def get_dashboard(
    service: Annotated[DashboardService, Depends(get_service)],
) -> DashboardView:
    return service.view()


@router.get("/transactions", response_model=TransactionsResponse)
async def get_transactions(
    service: Annotated[DashboardService, Depends(get_service)],
) -> TransactionsResponse:
    view = service.view()
    return TransactionsResponse(
        transactions=view.filtered_transactions,
        filtered_total_amount=view.filtered_total_amount,
        transaction_count=view.transaction_count,
        hidden_count=view.hidden_count,
        hidden_percent=view.hidden_percent,
    )


@router.get("/categories")
async def get_categories(
    service: Annotated[DashboardService, Depends(get_service)],
) -> list[str]:
    return service.view().all_categories


@router.post("/clear")
async def clear_all(
    service: Annotated[DashboardService, Depends(get_service)],
) -> dict[str, str]:
    await asyncio.to_thread(service.clear_all)
    return {"status": "success", "message": "All data cleared"}
