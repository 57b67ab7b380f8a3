from fastapi import APIRouter, UploadFile, File, Depends, status
from posadmin.auth.deps import get_identity
from posadmin.auth.identity import Identity
from posadmin.config import settings
from posadmin.errors import BadRequest
from posadmin.uploads.storage import save_upload

router = APIRouter(prefix="/api/upload", tags=["upload"])

# stored extension follows the checked content type, not the client filename
EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

@router.post("", status_code=status.HTTP_201_CREATED)
async def upload_image(
    file: UploadFile | None = File(None),
    identity: Identity = Depends(get_identity),
):
    if file is None or not file.filename:
        raise BadRequest("No file received")

    ext = EXTENSIONS.get(file.content_type or "")
    if ext is None:
        raise BadRequest("Unsupported file type. Use JPG, PNG, GIF or WEBP")

    max_bytes = settings.upload_max_bytes
    data = await file.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise BadRequest(f"File too large. Maximum is {max_bytes // (1024 * 1024)}MB")

    return {"url": save_upload(data, ext)}
