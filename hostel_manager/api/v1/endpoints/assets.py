"""
Public logo asset.
"""

from fastapi import APIRouter, Depends, File, Response, UploadFile

from hostel_manager.api.deps import get_admin_principal, get_logo_service
from hostel_manager.services.file import LogoService, detect_image_type

router = APIRouter(prefix="/assets", tags=["Assets"])


@router.get("/logo")
def get_logo(logos: LogoService = Depends(get_logo_service)):
    data = logos.read().unwrap()
    return Response(
        content=data,
        media_type=detect_image_type(data) or "application/octet-stream",
        headers={"Cache-Control": "no-cache"},
    )


@router.put("/logo", dependencies=[Depends(get_admin_principal)])
async def upload_logo(
    file: UploadFile = File(...),
    logos: LogoService = Depends(get_logo_service),
):
    # One byte past the limit is enough to reject
    data = await file.read(logos.max_bytes + 1)
    return logos.upload(data, file.content_type).unwrap()
