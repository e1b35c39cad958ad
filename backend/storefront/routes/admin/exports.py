"""POST /admin/exports/regions: CSV export of all regions to a private file."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.database import get_db_session
from storefront.schemas.file import ExportResponse
from storefront.services.export_service import export_service
from storefront.services.file_service import AbstractFileService
from storefront.services.local_file_service import get_file_service

router = APIRouter(prefix="/exports", tags=["Admin Exports"])


@router.post("/regions", response_model=ExportResponse, summary="Export regions as CSV")
async def export_regions(
    db: AsyncSession = Depends(get_db_session),
    file_service: AbstractFileService = Depends(get_file_service),
) -> ExportResponse:
    result = await export_service.export_regions(db, file_service)
    return ExportResponse(**result)
