import os
from io import BytesIO

from fastapi import UploadFile
from PIL import Image
from sqlmodel import Session

from api.utils.file import FileUploadError, read_upload, save_or_update
from models.tables.image_file import ImageFile

# formats without an alpha channel
RGB_ONLY_FORMATS = {"JPEG", "PPM"}


class ImageUploadError(FileUploadError):
    """Raised when an uploaded image could not be resized or stored."""


def get_extension(file_name: str | None) -> str:
    """
    Returns the extension of `file_name` without the leading dot, or an
    empty string when there is none.
    """
    if not file_name:
        return ""
    return os.path.splitext(file_name)[1].lstrip(".").lower()


def get_format(extension: str) -> str:
    """
    Maps a file extension (e.g. "jpg") to the Pillow format name ("JPEG").
    """
    formats = Image.registered_extensions()
    image_format = formats.get(f".{extension.lower()}")
    if image_format is None:
        raise ValueError(f"unsupported image format: '{extension}'")
    return image_format


def get_target_size(width: int, height: int, output_size: int) -> tuple[int, int]:
    """
    Computes the size of an image whose longer edge equals `output_size`,
    keeping the aspect ratio of `width` x `height`.
    """
    if width >= height:
        return output_size, max(1, round(height * output_size / width))
    return max(1, round(width * output_size / height)), output_size


def read_dimensions(image_bytes: bytes) -> tuple[int, int]:
    """
    Decodes the whole image and returns its (width, height).

    Raises an error for empty, truncated or non image payloads.
    """
    with Image.open(BytesIO(image_bytes)) as image:
        # Image.open only parses the header, load() forces a full decode
        image.load()
        return image.size


def scale_image(image_bytes: bytes, output_format: str, output_size: int) -> bytes:
    """
    Scales an image so that its longer edge equals `output_size` and encodes
    it as `output_format` (a file extension such as "png" or "jpg").

    An empty `output_format` keeps the format of the source image.
    """
    try:
        if output_size is None or output_size <= 0:
            raise ValueError(f"invalid thumbnail dimensions: {output_size}")

        with Image.open(BytesIO(image_bytes)) as image:
            image_format = get_format(output_format) if output_format else image.format

            resized = image.resize(
                get_target_size(image.width, image.height, output_size),
                Image.Resampling.LANCZOS,
            )

        if image_format in RGB_ONLY_FORMATS and resized.mode not in ("RGB", "L"):
            resized = resized.convert("RGB")

        with BytesIO() as buffer:
            resized.save(buffer, format=image_format)
            return buffer.getvalue()
    except Exception as e:
        raise ImageUploadError(f"Error on resizing an image: {e}") from e


async def upload_image(
        file: UploadFile,
        create_thumbnail: bool,
        dimensions: int | None,
        session: Session,
        image_model: type[ImageFile] = ImageFile,
) -> ImageFile:
    """
    Persists the uploaded image as a bytearray in the database.

    When `create_thumbnail` is set, a copy whose longer edge equals
    `dimensions` is stored next to the original. Width and height are read
    from the decoded original. Any failure is raised as an ImageUploadError.
    """
    try:
        image_bytes = await read_upload(file)

        image_to_persist = image_model(
            file_name=file.filename,
            file_type=file.content_type,
            file=image_bytes,
        )

        # create a thumbnail if requested
        if create_thumbnail:
            image_to_persist.thumbnail = scale_image(
                image_bytes,
                get_extension(file.filename),
                dimensions,
            )

        # detect dimensions
        image_to_persist.width, image_to_persist.height = read_dimensions(image_bytes)

        return save_or_update(session, image_to_persist)
    except Exception as e:
        raise ImageUploadError(f"Could not create the Image in DB: {e}") from e
