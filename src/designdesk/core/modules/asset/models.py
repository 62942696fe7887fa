import mimetypes
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, Field

from designdesk.core.models import ApiModel


class AssetTag(ApiModel):
    id: str
    name: str
    color: str | None = None


class Asset(ApiModel):
    """Image or document uploaded to a design section."""

    id: str
    file_name: str | None = None
    original_name: str | None = None
    file_type: str | None = None  # MIME type
    file_size: int | None = None  # Bytes
    url: str
    thumbnail_url: str | None = None
    caption: str | None = None
    uploaded_at: datetime | None = None
    is_pinned: bool = False
    tags: list[AssetTag] = Field(default_factory=list)


class UploadFile(BaseModel):
    """File content waiting to be uploaded."""

    filename: str = Field(..., description="Original filename")
    content: bytes = Field(..., description="File bytes")
    mime_type: str = Field(..., description="MIME type, e.g. image/png")

    @property
    def size(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: str | Path, mime_type: str | None = None) -> "UploadFile":
        """Read a local file, guessing the MIME type from its extension."""
        path = Path(path)
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(filename=path.name, content=path.read_bytes(), mime_type=mime_type)
