"""
Upload endpoints. Any signed-in user may upload; stored files are public and read-only.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import FileResponse

from auth import dependencies as auth_dependencies
from auth.security import SessionClaim

from . import service

router = APIRouter()


@router.post("/upload", status_code=status.HTTP_201_CREATED)
async def upload_image(
    _: SessionClaim = Depends(auth_dependencies.get_current_claim),
    image: UploadFile | None = File(default=None),
    upload_dir: Path = Depends(service.get_upload_dir),
) -> dict:
    image_url = await service.store_upload(image, upload_dir=upload_dir)
    return {"imageUrl": image_url}


@router.get("/uploads/{filename}", response_class=FileResponse)
async def get_upload(
    filename: str,
    upload_dir: Path = Depends(service.get_upload_dir),
) -> FileResponse:
    return FileResponse(service.resolve_upload(filename, upload_dir=upload_dir))
