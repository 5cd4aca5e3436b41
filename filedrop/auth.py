import secrets
import uuid
from fastapi import HTTPException
from filedrop.config import Settings

MAX_EXT_LEN = 10


def auth_header_key(x_api_key: str | None, settings: Settings):
    # header values arrive latin-1 decoded; latin-1 restores the wire bytes
    if x_api_key is None or not secrets.compare_digest(
        x_api_key.encode("latin-1"), settings.api_key.encode("utf-8", "surrogateescape")
    ):
        raise HTTPException(status_code=401, detail="Authorised access only")


def upload_extension(filename: str) -> str:
    """Return the extension of ``filename``, dot included.

    Only the final path element counts, so ``dir.v2/archive`` has no extension.
    A leading dot is part of the extension (``.bashrc``). The length limit
    is in UTF-8 bytes.
    """
    base = filename.rsplit("/", 1)[-1]
    dot = base.rfind(".")
    ext = base[dot:] if dot >= 0 else ""
    if not ext or len(ext.encode("utf-8", "surrogateescape")) > MAX_EXT_LEN:
        raise HTTPException(status_code=415, detail="File must have a valid extension")
    return ext


def stored_name(ext: str) -> str:
    return f"{uuid.uuid4()}{ext}"
