import uuid
from typing import Annotated

from fastapi import APIRouter, Form, HTTPException, UploadFile
from fastapi.responses import Response
from sqlmodel import Session, select
from starlette import status

from api.dependencies.logger import LoggerDep
from api.dependencies.session import SessionDep
from api.utils.file import content_disposition
from api.utils.image import ImageUploadError, upload_image
from core.settings import settings
from models.file_info import ImageFileInfo
from models.sucess_response import SuccessResponse
from models.tables.image_file import ImageFile

router = APIRouter(prefix="/images", tags=["images"])


def get_image_or_404(image_id: uuid.UUID, session: Session) -> ImageFile:
    image = session.get(ImageFile, image_id)
    if image is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Image not found")
    return image


@router.post("/")
async def create_image(
        image: UploadFile,
        session: SessionDep,
        logger: LoggerDep,
        create_thumbnail: Annotated[bool, Form()] = False,
        dimensions: Annotated[int, Form(
            title="Longer edge of the thumbnail in pixels",
        )] = settings.THUMBNAIL_DIMENSIONS,
) -> ImageFileInfo:
    try:
        image_file = await upload_image(
            file=image,
            create_thumbnail=create_thumbnail,
            dimensions=dimensions,
            session=session,
        )
    except ImageUploadError as e:
        logger.error(f"failed to upload image {image.filename}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(e),
        )

    logger.info(f"stored image {image_file.id} ({image_file.width}x{image_file.height})")
    return ImageFileInfo.from_image(image_file)


@router.get("/")
async def get_images(
        session: SessionDep,
) -> list[ImageFileInfo]:
    statement = (select(ImageFile)
                 .order_by(ImageFile.created_at.desc())
                 )

    return [ImageFileInfo.from_image(image) for image in session.exec(statement).all()]


@router.get("/{image_id}")
async def get_image(
        image_id: uuid.UUID,
        session: SessionDep,
) -> ImageFileInfo:
    return ImageFileInfo.from_image(get_image_or_404(image_id, session))


@router.get("/{image_id}/file")
async def get_image_file(
        image_id: uuid.UUID,
        session: SessionDep,
) -> Response:
    image = get_image_or_404(image_id, session)

    return Response(
        content=image.file,
        media_type=image.file_type,
        headers={
            "Content-Disposition": content_disposition("inline", image.file_name),
        }
    )


@router.get("/{image_id}/thumbnail")
async def get_image_thumbnail(
        image_id: uuid.UUID,
        session: SessionDep,
) -> Response:
    image = get_image_or_404(image_id, session)
    if image.thumbnail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Thumbnail not found")

    # thumbnails are encoded in the format of the original file
    return Response(
        content=image.thumbnail,
        media_type=image.file_type,
    )


@router.delete("/{image_id}")
async def delete_image(
        image_id: uuid.UUID,
        session: SessionDep,
        logger: LoggerDep,
) -> SuccessResponse:
    image = get_image_or_404(image_id, session)

    session.delete(image)
    session.commit()

    logger.info(f"deleted image {image_id}")
    return SuccessResponse()
