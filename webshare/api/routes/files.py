import logging
from pathlib import Path
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile
from pydantic import BaseModel
from starlette.responses import FileResponse

from webshare.core.errors import ShareError
from webshare.services.sharing import ShareService

logger = logging.getLogger(__name__)

router = APIRouter()

_TOKEN_CHARS = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789!#$%&'*+-.^_`|~")

class ShareResponse(BaseModel):
    share_code: str

def get_share_service(request: Request) -> ShareService:
    return request.app.state.share_service

def content_disposition(filename: str) -> str:
    """attachment; filename=<name>, quoted only when the name is not a plain token."""
    if filename and set(filename) <= _TOKEN_CHARS:
        return f"attachment; filename={filename}"
    if filename.isascii():
        escaped = filename.replace("\\", "\\\\").replace('"', '\\"')
        return f'attachment; filename="{escaped}"'
    fallback = filename.encode("ascii", "replace").decode("ascii").replace('"', "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename, safe='')}"

@router.post("/upload", response_model=ShareResponse)
def upload(
    file: Optional[UploadFile] = File(None),
    service: ShareService = Depends(get_share_service),
):
    if file is None:
        raise HTTPException(status_code=400, detail="Invalid file")
    try:
        entry = service.share(file.filename or "", file.file)
    except ShareError as e:
        raise HTTPException(status_code=500, detail=str(e))
    finally:
        file.file.close()
    return ShareResponse(share_code=entry.code)

@router.get("/download/")
def download_missing_code():
    raise HTTPException(status_code=400, detail="Share code missing")

@router.get("/download/{path:path}")
def download(path: str, service: ShareService = Depends(get_share_service)):
    # last path segment is the code: /download/x/<code> works too
    code = path.rstrip("/").rsplit("/", 1)[-1]
    if not code:
        raise HTTPException(status_code=400, detail="Share code missing")
    entry = service.resolve(code)
    if entry is None:
        raise HTTPException(status_code=404, detail="File not found. The code may be invalid.")
    if not Path(entry.path).is_file():
        logger.warning(f"Backing file for code {code} is gone: {entry.path}")
        raise HTTPException(status_code=404, detail="File not found")

    logger.info(f"File requested: {entry.path} (Code: {code})")
    headers = {"Content-Disposition": content_disposition(entry.filename)}
    return FileResponse(entry.path, media_type="application/octet-stream", headers=headers)
