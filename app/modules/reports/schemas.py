from pydantic import BaseModel, ConfigDict
from typing import Optional, List, Dict, Any, Union
from enum import Enum


class ReportType(str, Enum):
    CRIME = "crime"
    ACCIDENT = "accident"
    OTHER = "other"


class ReportCreate(BaseModel):
    name: str
    report_type: str
    description: str
    contact_number: Optional[str] = None
    age: Optional[int] = None
    date: Optional[str] = None
    location: Optional[str] = None


class ReportResponse(BaseModel):
    # Columns added later in Supabase are passed through untouched
    model_config = ConfigDict(extra="allow", from_attributes=True)

    id: Optional[Any] = None
    name: Optional[str] = None
    contact_number: Optional[Union[str, int]] = None
    age: Optional[Union[int, str]] = None
    report_type: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    location: Optional[str] = None
    image_path: Optional[str] = None


class ReportSubmitResponse(BaseModel):
    message: str
    data: List[Dict[str, Any]]
