from supabase import Client, PostgrestAPIError, StorageException
from fastapi import UploadFile
from app.core.errors import ProviderError, UnexpectedError, ValidationError, provider_message
from app.modules.reports.schemas import ReportCreate, ReportResponse, ReportSubmitResponse
from app.modules.reports.storage import ReportImageStorage, image_object_name
from typing import List, Optional
import logging

logger = logging.getLogger(__name__)

REPORTS_TABLE = "reports"


class ReportService:
    def __init__(self, supabase: Client, storage: ReportImageStorage):
        self.supabase = supabase
        self.storage = storage

    def list_reports(self, report_type: Optional[str] = None) -> List[ReportResponse]:
        """All reports, or those of one report_type; no paging or ordering"""
        try:
            query = self.supabase.table(REPORTS_TABLE).select("*")
            if report_type:
                query = query.eq("report_type", report_type)
            result = query.execute()
        except PostgrestAPIError as e:
            raise ProviderError(provider_message(e))
        except Exception as e:
            logger.exception(f"Error retrieving reports: {e}")
            label = f"{report_type} reports" if report_type else "reports"
            raise UnexpectedError(f"Server error retrieving {label}")
        return [ReportResponse(**row) for row in result.data or []]

    async def submit_report(
        self,
        report: ReportCreate,
        image: Optional[UploadFile] = None
    ) -> ReportSubmitResponse:
        """
        Store the optional image first, then insert the report row.

        A failed upload aborts the submission. A failed insert leaves the
        uploaded object in the bucket.
        """
        image_path = None
        if image is not None:
            image_path = await self._store_image(image)

        row = report.model_dump()
        row["image_path"] = image_path
        try:
            result = self.supabase.table(REPORTS_TABLE).insert(row).execute()
        except PostgrestAPIError as e:
            if image_path:
                logger.warning(f"Report insert failed; image {image_path} left in storage")
            raise ProviderError(provider_message(e))
        except Exception as e:
            logger.exception(f"Error submitting report: {e}")
            raise UnexpectedError("Server error submitting report")

        logger.info(f"Report submitted (type={report.report_type}, image={image_path})")
        return ReportSubmitResponse(message="Report submitted successfully", data=result.data or [])

    async def _store_image(self, image: UploadFile) -> str:
        if image.content_type and not image.content_type.startswith("image/"):
            raise ValidationError("Only image files can be attached to a report")

        staged = await self.storage.stage(image)
        try:
            return self.storage.upload(staged, image_object_name(image.filename), image.content_type)
        except StorageException as e:
            logger.error(f"Supabase Storage upload failed: {e}")
            raise ProviderError(provider_message(e))
        except Exception as e:
            logger.exception(f"Image upload failed: {e}")
            raise UnexpectedError("Server error submitting report")
        finally:
            self.storage.discard(staged)
