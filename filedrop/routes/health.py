"""Health check endpoint."""
import os
from pathlib import Path
from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health(request: Request):
    checks = {"app": "ok"}

    # Storage directory must exist and accept new files
    upload_dir = Path(request.app.state.settings.upload_path or ".").resolve()
    if not upload_dir.is_dir():
        checks["storage"] = f"error: {upload_dir} is not a directory"
    elif not os.access(upload_dir, os.W_OK | os.X_OK):
        checks["storage"] = f"error: {upload_dir} is not writable"
    else:
        checks["storage"] = "ok"

    if checks["storage"] != "ok":
        return {"status": "unhealthy", "checks": checks}
    return {"status": "ok", "checks": checks}
