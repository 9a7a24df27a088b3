import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, LargeBinary
from sqlmodel import Field, SQLModel

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

class FileBase(SQLModel):
    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
    )

    file_name: str = Field(max_length=255)
    # MIME type declared by the client
    file_type: str | None = Field(default=None, max_length=255)

    created_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_type=DateTime(timezone=True),
        sa_column_kwargs={"onupdate": utc_now},
    )

    file: bytes = Field(sa_type=LargeBinary)

class File(FileBase, table=True):
    pass
