import logging
from pathlib import Path
from fastapi import APIRouter, HTTPException, Header, Request
from fastapi.responses import JSONResponse
from starlette.datastructures import UploadFile
from filedrop.auth import auth_header_key, upload_extension, stored_name
from filedrop.config import Settings
from filedrop.models import UploadResponse

router = APIRouter(tags=["upload"])
logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "TRACE", "CONNECT"]


def _remote(request: Request) -> str:
    if request.client is None:
        return "unknown"
    return f"{request.client.host}:{request.client.port}"


async def _read_upload(request: Request, remote: str):
    try:
        form = await request.form()
    except Exception as e:
        logger.warning("Error reading file from %s: %s", remote, e)
        raise HTTPException(status_code=400, detail="Failed to read file") from e
    upload = form.get("file")
    if not isinstance(upload, UploadFile) or not upload.filename:
        await form.close()
        logger.warning("Error reading file from %s: no file field", remote)
        raise HTTPException(status_code=400, detail="Failed to read file")
    return form, upload


async def _copy_to(upload: UploadFile, dst: Path):
    try:
        out = dst.open("xb")
    except (OSError, ValueError) as e:
        logger.error("Error creating file %s: %s", dst, e)
        raise HTTPException(status_code=500, detail="Failed to save file") from e
    with out:
        try:
            while True:
                chunk = await upload.read(CHUNK_SIZE)
                if not chunk:
                    break
                out.write(chunk)
        except OSError as e:
            logger.error("Error writing file %s: %s", dst, e)
            raise HTTPException(status_code=500, detail="Failed to write file") from e


@router.api_route("/upload", methods=ALL_METHODS)
async def api_upload(request: Request, x_api_key: str | None = Header(default=None)):
    remote = _remote(request)
    logger.info("Incoming %s request from %s", request.method, remote)

    if request.method != "POST":
        logger.warning("Rejected: method %s not POST from %s", request.method, remote)
        raise HTTPException(status_code=405, detail="Only POST allowed", headers={"Allow": "POST"})

    settings: Settings = request.app.state.settings
    try:
        auth_header_key(x_api_key, settings)
    except HTTPException:
        logger.warning("Rejected: invalid API key from %s", remote)
        raise

    form, upload = await _read_upload(request, remote)
    try:
        try:
            ext = upload_extension(upload.filename)
        except HTTPException:
            logger.warning("Invalid file extension in '%s' from %s", upload.filename, remote)
            raise

        name = stored_name(ext)
        await _copy_to(upload, Path(settings.upload_path) / name)
    finally:
        await form.close()

    logger.info(
        "Successfully uploaded file %s from %s (original filename: %s)",
        name,
        remote,
        upload.filename,
    )
    try:
        body = UploadResponse(url=settings.public_url + name).model_dump()
        return JSONResponse(body)
    except (TypeError, ValueError) as e:
        logger.error("Error encoding JSON response: %s", e)
        raise HTTPException(status_code=500, detail="Failed to encode response") from e
