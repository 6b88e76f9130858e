# app/utils/uploader.py
import io
import time
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from starlette.datastructures import UploadFile
from PIL import Image, UnidentifiedImageError

from app.exceptions import UploadError

# Pillow format names accepted for each image MIME type
IMAGE_FORMATS = {
    "image/jpeg": "JPEG",
    "image/jpg": "JPEG",
    "image/png": "PNG",
}


def build_filename(original_name: str) -> str:
    """`My Photo.PNG` -> `my-photo-1700000000000.PNG`"""
    original = Path(Path(original_name).name)
    stem = original.stem.lower().replace(" ", "-") or "upload"
    return f"{stem}-{int(time.time() * 1000)}{original.suffix}"


def verify_image(data: bytes, content_type: str) -> bool:
    """Check the bytes decode as the image format the client declared"""
    expected = IMAGE_FORMATS.get(content_type)
    if expected is None:
        return True
    try:
        image = Image.open(io.BytesIO(data))
        image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        logging.error(f"Image verification failed: {e}")
        return False
    return image.format == expected


class Uploader:
    """Stores uploaded files of one kind under `<root>/<subfolder>`."""

    def __init__(
        self,
        root: Path,
        subfolder: str,
        allowed_types: Iterable[str],
        max_size: int,
        error_message: str,
    ):
        self.root = Path(root)
        self.subfolder = subfolder
        self.allowed_types = set(allowed_types)
        self.max_size = max_size
        self.error_message = error_message

    @property
    def directory(self) -> Path:
        return self.root / self.subfolder

    def _too_large(self) -> UploadError:
        return UploadError(f"File too large! Maximum size is {self.max_size} bytes")

    def check(self, upload: UploadFile, data: bytes) -> None:
        if upload.content_type not in self.allowed_types:
            raise UploadError(self.error_message)
        if len(data) > self.max_size:
            raise self._too_large()
        if not verify_image(data, upload.content_type):
            raise UploadError(self.error_message)

    async def read(self, upload: UploadFile) -> bytes:
        """Read at most one byte past the limit; a declared size is trusted first."""
        if upload.content_type not in self.allowed_types:
            raise UploadError(self.error_message)
        if upload.size is not None and upload.size > self.max_size:
            raise self._too_large()
        return await upload.read(self.max_size + 1)

    async def store(self, uploads: List[UploadFile]) -> List[str]:
        """
        Validate and write every upload; returns paths relative to the root.
        Nothing stays on disk when any file is rejected.
        """
        stored: List[str] = []
        try:
            for upload in uploads:
                data = await self.read(upload)
                self.check(upload, data)
                stored.append(self._write(upload.filename, data))
        except Exception:
            self.remove_all(stored)
            raise
        return stored

    def _write(self, original_name: str, data: bytes) -> str:
        filename = build_filename(original_name)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            (self.directory / filename).write_bytes(data)
        except OSError as e:
            logging.error(f"Failed to store upload {filename}: {e}")
            raise UploadError(f"Failed to store file: {e}", status_code=500) from e
        return f"{self.subfolder}/{filename}"

    def path_for(self, relative_path: str) -> Path:
        return self.root / relative_path

    def remove(self, relative_path: Optional[str]) -> bool:
        """Delete a stored file; failures are logged, never raised."""
        if not relative_path:
            return False
        try:
            self.path_for(relative_path).unlink()
            return True
        except OSError as e:
            logging.error(f"Failed to remove upload {relative_path}: {e}")
            return False

    def remove_all(self, relative_paths: Iterable[str]) -> None:
        for path in relative_paths:
            self.remove(path)
