from fastapi import HTTPException, Request

from spending_dashboard.manager import DashboardService


def get_service(request: Request) -> DashboardService:
    service = getattr(request.app.state, "service", None)
    if not service:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return service
