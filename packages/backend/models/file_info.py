import uuid
from datetime import datetime

from pydantic import BaseModel

from models.tables.file import File
from models.tables.image_file import ImageFile

class FileInfo(BaseModel):
    id: uuid.UUID
    file_name: str
    file_type: str | None
    file_size: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_file(cls, file: File) -> "FileInfo":
        return cls(
            id=file.id,
            file_name=file.file_name,
            file_type=file.file_type,
            file_size=len(file.file),
            created_at=file.created_at,
            updated_at=file.updated_at,
        )

class ImageFileInfo(BaseModel):
    id: uuid.UUID
    file_name: str
    file_type: str | None
    file_size: int
    width: int
    height: int
    has_thumbnail: bool
    thumbnail_size: int | None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_image(cls, image: ImageFile) -> "ImageFileInfo":
        return cls(
            id=image.id,
            file_name=image.file_name,
            file_type=image.file_type,
            file_size=len(image.file),
            width=image.width,
            height=image.height,
            has_thumbnail=image.thumbnail is not None,
            thumbnail_size=len(image.thumbnail) if image.thumbnail is not None else None,
            created_at=image.created_at,
            updated_at=image.updated_at,
        )
