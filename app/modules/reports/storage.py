from supabase import Client
from fastapi import UploadFile
from pathlib import Path
from typing import Optional
import os
import time
import uuid
import logging

logger = logging.getLogger(__name__)

IMAGE_PREFIX = "images"


def image_object_name(filename: str, now_ms: Optional[int] = None) -> str:
    """images/<epoch millis>-<original name>; the timestamp keeps same-named uploads apart"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    base_name = os.path.basename(filename.replace("\\", "/")) or "upload"
    return f"{IMAGE_PREFIX}/{now_ms}-{base_name}"


class ReportImageStorage:
    """Stages incoming images on disk and pushes them to a Supabase Storage bucket"""

    def __init__(self, supabase: Client, bucket_name: str, upload_dir: str):
        self.supabase = supabase
        self.bucket_name = bucket_name
        self.upload_dir = Path(upload_dir)

    async def stage(self, file: UploadFile) -> Path:
        """Write the uploaded file to a per-request staging file"""
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        staged = self.upload_dir / uuid.uuid4().hex
        content = await file.read()
        staged.write_bytes(content)
        return staged

    def upload(self, staged: Path, object_name: str, content_type: Optional[str] = None) -> str:
        """Upload the staged file and return its path inside the bucket"""
        self.supabase.storage.from_(self.bucket_name).upload(
            object_name,
            staged.read_bytes(),
            file_options={"content-type": content_type or "application/octet-stream"}
        )
        logger.info(f"Uploaded report image to Supabase Storage: {self.bucket_name}/{object_name}")
        return object_name

    def discard(self, staged: Path) -> bool:
        """Remove a staging file; failures are only logged"""
        try:
            staged.unlink(missing_ok=True)
            return True
        except OSError as e:
            logger.warning(f"Failed to delete staged upload {staged}: {e}")
            return False
