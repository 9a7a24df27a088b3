from sqlalchemy import LargeBinary
from sqlmodel import Field

from models.tables.file import FileBase

class ImageFile(FileBase, table=True):
    # decoded pixel dimensions of `file`
    width: int = Field(default=0)
    height: int = Field(default=0)

    thumbnail: bytes | None = Field(default=None, sa_type=LargeBinary)
