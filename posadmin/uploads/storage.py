import logging
import uuid
from pathlib import Path
from posadmin.config import settings

logger = logging.getLogger(__name__)

URL_PREFIX = "/uploads/"

def upload_root() -> Path:
    root = Path(settings.upload_dir)
    root.mkdir(parents=True, exist_ok=True)
    return root

def save_upload(data: bytes, ext: str) -> str:
    """Write bytes under a fresh uuid name with the given extension; returns the public url."""
    filename = f"{uuid.uuid4()}{ext}"
    (upload_root() / filename).write_bytes(data)
    return f"{URL_PREFIX}{filename}"

def remove_upload(url: str) -> bool:
    if not url.startswith(URL_PREFIX):
        return False
    path = upload_root() / Path(url[len(URL_PREFIX):]).name
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError:
        logger.exception("Could not remove uploaded file %s", path)
        return False
    return True
