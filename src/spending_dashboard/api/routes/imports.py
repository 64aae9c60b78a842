import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, UploadFile

from spending_dashboard.api.dependencies import get_service
from spending_dashboard.api.schemas import ImportResponse
from spending_dashboard.ingest.importer import decode_upload, is_csv_filename
from spending_dashboard.ingest.mapper import InvalidCsvError
from spending_dashboard.logger import get_logger
from spending_dashboard.manager import DashboardService

logger = get_logger(__name__)

router = APIRouter(prefix="/api")


@router.post("/import", response_model=ImportResponse)
async def import_csv(
    file: UploadFile,
    service: Annotated[DashboardService, Depends(get_service)],
) -> ImportResponse:
    if not is_csv_filename(file.filename):
        logger.warning("[IMPORT] '%s' does not look like a .csv file; parsing anyway.", file.filename)

    payload = await file.read()
    try:
        text = decode_upload(payload)
        records = await asyncio.to_thread(service.import_csv, text)
    except InvalidCsvError as exc:
        logger.warning("[IMPORT] '%s' rejected: %s", file.filename, exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    return ImportResponse(
        status="success",
        filename=file.filename,
        imported=len(records),
        total_amount=service.view().total_amount,
    )
