from fastapi import APIRouter, Depends, UploadFile, File, Form
from app.config import settings
from app.core.errors import ValidationError
from app.database.supabase_client import get_supabase
from app.modules.reports.schemas import ReportCreate, ReportResponse, ReportSubmitResponse, ReportType
from app.modules.reports.service import ReportService
from app.modules.reports.storage import ReportImageStorage
from supabase import Client
from typing import List, Optional

router = APIRouter(tags=["reports"])


def get_report_service(supabase: Client = Depends(get_supabase)) -> ReportService:
    storage = ReportImageStorage(supabase, settings.report_bucket, settings.upload_dir)
    return ReportService(supabase, storage)


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


@router.get("/reports", response_model=List[ReportResponse])
async def list_reports(service: ReportService = Depends(get_report_service)):
    """All submitted reports"""
    return service.list_reports()


@router.get("/reports/crime", response_model=List[ReportResponse])
async def list_crime_reports(service: ReportService = Depends(get_report_service)):
    return service.list_reports(ReportType.CRIME.value)


@router.get("/reports/accident", response_model=List[ReportResponse])
async def list_accident_reports(service: ReportService = Depends(get_report_service)):
    return service.list_reports(ReportType.ACCIDENT.value)


@router.post("/report", response_model=ReportSubmitResponse)
async def submit_report(
    name: str = Form(...),
    report_type: str = Form(...),
    description: str = Form(...),
    contact_number: Optional[str] = Form(None),
    age: Optional[str] = Form(None),
    date: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    service: ReportService = Depends(get_report_service)
):
    """
    Submit an incident report as multipart form data.
    An optional `image` file is stored in Supabase Storage and its path
    saved on the row as image_path.
    """
    missing = [
        field for field, value in (("name", name), ("report_type", report_type), ("description", description))
        if not value.strip()
    ]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    age_value = _blank_to_none(age)
    if age_value is not None:
        # isdigit() would let superscripts through, which int() rejects
        if not age_value.isdecimal():
            raise ValidationError("age must be a whole number")
        age_value = int(age_value)

    report = ReportCreate(
        name=name.strip(),
        report_type=report_type.strip().lower(),
        description=description.strip(),
        contact_number=_blank_to_none(contact_number),
        age=age_value,
        date=_blank_to_none(date),
        location=_blank_to_none(location),
    )
    if image is not None and not image.filename:
        image = None
    return await service.submit_report(report, image)
