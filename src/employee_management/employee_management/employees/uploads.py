from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..core.constants import ALLOWED_IMAGE_EXTENSIONS
from ..core.exceptions import ValidationError


class ProfileImageStore:
    """Saves uploaded profile images to a local folder as ``<millis><ext>``."""

    def __init__(self, folder: str | Path):
        self._folder = Path(folder)

    @property
    def folder(self) -> Path:
        return self._folder

    def save(self, upload: Optional[FileStorage]) -> Optional[str]:
        if upload is None or not upload.filename:
            return None

        original = secure_filename(upload.filename)
        ext = Path(original).suffix.lower()
        if ext.lstrip(".") not in ALLOWED_IMAGE_EXTENSIONS:
            raise ValidationError("Unsupported image type")

        self._folder.mkdir(parents=True, exist_ok=True)
        filename = f"{int(time.time() * 1000)}{ext}"
        upload.save(str(self._folder / filename))
        return filename

    def discard(self, filename: Optional[str]) -> None:
        """Remove a file written by :meth:`save`; missing files are ignored."""
        if not filename:
            return
        (self._folder / Path(filename).name).unlink(missing_ok=True)
