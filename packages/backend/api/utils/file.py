from typing import TypeVar
from urllib.parse import quote

from fastapi import UploadFile
from sqlmodel import Session, SQLModel

from models.tables.file import File

E = TypeVar("E", bound=SQLModel)


class FileUploadError(Exception):
    """Raised when an uploaded file could not be stored."""


def content_disposition(disposition: str, file_name: str) -> str:
    """
    Builds a Content-Disposition header value. The name is percent-encoded
    (RFC 5987) since header values are latin-1 and may not contain quotes.
    """
    return f"{disposition}; filename*=UTF-8''{quote(file_name, safe='')}"


def save_or_update(session: Session, entity: E) -> E:
    """
    Persist the given entity, rolling back the session if the commit fails.
    """
    try:
        session.add(entity)
        session.commit()
    except Exception:
        session.rollback()
        raise
    session.refresh(entity)
    return entity


async def read_upload(file: UploadFile) -> bytes:
    try:
        return await file.read()
    finally:
        await file.close()


async def upload_file(
        file: UploadFile,
        session: Session,
        file_model: type[File] = File,
) -> File:
    try:
        data = await read_upload(file)

        file_to_persist = file_model(
            file_name=file.filename,
            file_type=file.content_type,
            file=data,
        )

        return save_or_update(session, file_to_persist)
    except Exception as e:
        raise FileUploadError(f"Could not create the File in DB: {e}") from e
