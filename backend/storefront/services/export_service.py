"""
Storefront Backend — Export Service
=====================================

What:  Writes CSV exports of store data through the file service's stream
       contract and hands back a presigned download link.
Who:   POST /admin/exports/regions

Export files are uploaded with acl="private" so they are only reachable
through the time-limited URL returned here.
"""

import csv
import io
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models import Region
from storefront.schemas.file import GetUploadedFileType, UploadStreamDescriptorType
from storefront.services.common import live
from storefront.services.file_service import AbstractFileService

logger = logging.getLogger(__name__)

REGION_COLUMNS = [
    "Region ID",
    "Region Name",
    "Currency Code",
    "Tax Rate",
    "Tax Code",
    "Includes Tax",
    "Countries",
    "Created At",
]

BATCH_SIZE = 100


def _csv_line(values: List[Any]) -> str:
    buffer = io.StringIO()
    csv.writer(buffer).writerow(values)
    return buffer.getvalue()


def _region_row(region: Region) -> List[Any]:
    return [
        region.id,
        region.name,
        region.currency_code,
        region.tax_rate,
        region.tax_code or "",
        region.includes_tax,
        ";".join(c.iso_2 for c in region.countries),
        region.created_at.isoformat(),
    ]


class ExportService:
    async def export_regions(
        self,
        db: AsyncSession,
        file_service: AbstractFileService,
    ) -> Dict[str, str]:
        """
        Export every live region to a private CSV file.

        Returns:
            {"file_key": ..., "download_url": ...}
        """
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        upload = await file_service.get_upload_stream_descriptor(
            UploadStreamDescriptorType(name=f"exports/regions-{timestamp}", ext="csv", acl="private")
        )

        exported = 0
        try:
            await upload.write_stream.write(_csv_line(REGION_COLUMNS))
            offset = 0
            while True:
                result = await db.execute(
                    live(Region)
                    .order_by(Region.created_at, Region.id)
                    .limit(BATCH_SIZE)
                    .offset(offset)
                )
                regions = list(result.scalars().all())
                if not regions:
                    break
                for region in regions:
                    await upload.write_stream.write(_csv_line(_region_row(region)))
                exported += len(regions)
                offset += BATCH_SIZE
            await upload.write_stream.close()
        except Exception:
            await upload.write_stream.abort()
            raise

        stored = await upload.promise
        download_url = await file_service.get_presigned_download_url(
            GetUploadedFileType(key=stored.key)
        )
        logger.info("Exported %d regions to %s", exported, stored.key)
        return {"file_key": stored.key, "download_url": download_url}


export_service = ExportService()
