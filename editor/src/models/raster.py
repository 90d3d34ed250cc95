"""Raster, payload and artifact containers."""
import base64
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from PyQt5.QtGui import QImage

from constants import ARTIFACT_MEDIA_TYPE


@dataclass(frozen=True)
class ImagePayload:
    """Binary file payload handed to the loader.

    `media_type` is what the file chooser reported. When it is missing the
    type is guessed from the file name.
    """
    data: bytes
    media_type: Optional[str] = None
    name: str = ""

    @classmethod
    def from_path(cls, path):
        path = Path(path)
        return cls(data=path.read_bytes(), media_type=None, name=path.name)

    @property
    def resolved_media_type(self):
        if self.media_type:
            return self.media_type.lower()
        guessed, _ = mimetypes.guess_type(self.name) if self.name else (None, None)
        return guessed or 'application/octet-stream'


@dataclass(frozen=True, eq=False)
class RasterImage:
    """Decoded pixel source.

    Immutable once loaded; a new file produces a new RasterImage with a
    higher serial. `image` is an RGBA QImage owning its own buffer.
    """
    width: int
    height: int
    image: QImage = field(repr=False)
    serial: int = 0
    name: str = ""

    @property
    def size(self):
        return (self.width, self.height)


@dataclass(frozen=True)
class Artifact:
    """Encoded circular composite at the export resolution."""
    data: bytes = field(repr=False)
    diameter_px: int
    key: tuple = ()
    media_type: str = ARTIFACT_MEDIA_TYPE

    @property
    def data_uri(self):
        encoded = base64.b64encode(self.data).decode('ascii')
        return f"data:{self.media_type};base64,{encoded}"

    def to_qimage(self):
        image = QImage()
        image.loadFromData(self.data)
        return image

    def save(self, path):
        Path(path).write_bytes(self.data)
