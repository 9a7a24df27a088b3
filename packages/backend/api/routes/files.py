import uuid

from fastapi import APIRouter, HTTPException, UploadFile
from fastapi.responses import Response
from sqlmodel import Session
from starlette import status

from api.dependencies.logger import LoggerDep
from api.dependencies.session import SessionDep
from api.utils.file import FileUploadError, content_disposition, upload_file
from models.file_info import FileInfo
from models.sucess_response import SuccessResponse
from models.tables.file import File

router = APIRouter(prefix="/files", tags=["files"])


def get_file_or_404(file_id: uuid.UUID, session: Session) -> File:
    file = session.get(File, file_id)
    if file is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="File not found")
    return file


@router.post("/")
async def create_file(
        file: UploadFile,
        session: SessionDep,
        logger: LoggerDep,
) -> FileInfo:
    try:
        stored = await upload_file(file=file, session=session)
    except FileUploadError as e:
        logger.error(f"failed to upload file {file.filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    logger.info(f"stored file {stored.id}")
    return FileInfo.from_file(stored)


@router.get("/{file_id}")
async def get_file(
        file_id: uuid.UUID,
        session: SessionDep,
) -> FileInfo:
    return FileInfo.from_file(get_file_or_404(file_id, session))


@router.get("/{file_id}/file")
async def get_file_content(
        file_id: uuid.UUID,
        session: SessionDep,
) -> Response:
    file = get_file_or_404(file_id, session)

    return Response(
        content=file.file,
        media_type=file.file_type,
        headers={
            "Content-Disposition": content_disposition("attachment", file.file_name),
        }
    )


@router.delete("/{file_id}")
async def delete_file(
        file_id: uuid.UUID,
        session: SessionDep,
        logger: LoggerDep,
) -> SuccessResponse:
    file = get_file_or_404(file_id, session)

    session.delete(file)
    session.commit()

    logger.info(f"deleted file {file_id}")
    return SuccessResponse()
