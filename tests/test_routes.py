import uuid
from io import BytesIO
from urllib.parse import quote

from PIL import Image
from sqlmodel import select

from models.tables.image_file import ImageFile

IMAGES_URL = "/api/v1/images/"
FILES_URL = "/api/v1/files/"


def post_image(client, data: bytes, filename: str, content_type: str, **form):
    return client.post(
        IMAGES_URL,
        files={"image": (filename, data, content_type)},
        data={key: str(value).lower() if isinstance(value, bool) else str(value) for key, value in form.items()},
    )


def test_create_image_without_thumbnail(client, png_bytes):
    response = post_image(client, png_bytes, "picture.png", "image/png", dimensions=16)

    assert response.status_code == 200
    body = response.json()
    assert body["file_name"] == "picture.png"
    assert body["file_type"] == "image/png"
    assert body["width"] == 64
    assert body["height"] == 32
    assert body["file_size"] == len(png_bytes)
    assert body["has_thumbnail"] is False
    assert body["thumbnail_size"] is None


def test_create_image_with_thumbnail(client, jpeg_bytes):
    response = post_image(
        client, jpeg_bytes, "portrait.jpeg", "image/jpeg",
        create_thumbnail=True, dimensions=60,
    )

    assert response.status_code == 200
    image_id = response.json()["id"]
    assert response.json()["has_thumbnail"] is True

    thumbnail = client.get(f"{IMAGES_URL}{image_id}/thumbnail")
    assert thumbnail.status_code == 200
    assert thumbnail.headers["content-type"] == "image/jpeg"
    decoded = Image.open(BytesIO(thumbnail.content))
    assert decoded.size == (20, 60)


def test_create_image_uses_default_dimensions(client, png_bytes):
    response = post_image(client, png_bytes, "picture.png", "image/png", create_thumbnail=True)

    assert response.status_code == 200
    thumbnail = client.get(f"{IMAGES_URL}{response.json()['id']}/thumbnail")
    assert Image.open(BytesIO(thumbnail.content)).size == (150, 75)


def test_create_image_rejects_malformed_payload(client, session):
    response = post_image(client, b"not an image", "broken.png", "image/png")

    assert response.status_code == 500
    assert response.json()["detail"].startswith("Could not create the Image in DB: ")
    assert session.exec(select(ImageFile)).all() == []


def test_get_image_file_returns_original_bytes(client, png_bytes):
    image_id = post_image(client, png_bytes, "picture.png", "image/png").json()["id"]

    response = client.get(f"{IMAGES_URL}{image_id}/file")
    assert response.status_code == 200
    assert response.content == png_bytes
    assert response.headers["content-type"] == "image/png"
    assert response.headers["content-disposition"] == "inline; filename*=UTF-8''picture.png"


def test_get_image_metadata(client, png_bytes):
    image_id = post_image(client, png_bytes, "picture.png", "image/png").json()["id"]

    response = client.get(f"{IMAGES_URL}{image_id}")
    assert response.status_code == 200
    assert response.json()["id"] == image_id


def test_get_images_lists_stored_images(client, png_bytes, jpeg_bytes):
    post_image(client, png_bytes, "a.png", "image/png")
    post_image(client, jpeg_bytes, "b.jpg", "image/jpeg")

    response = client.get(IMAGES_URL)
    assert response.status_code == 200
    assert {image["file_name"] for image in response.json()} == {"a.png", "b.jpg"}


def test_missing_thumbnail_is_404(client, png_bytes):
    image_id = post_image(client, png_bytes, "picture.png", "image/png").json()["id"]

    response = client.get(f"{IMAGES_URL}{image_id}/thumbnail")
    assert response.status_code == 404
    assert response.json()["detail"] == "Thumbnail not found"


def test_unknown_image_is_404(client):
    unknown = uuid.uuid4()

    assert client.get(f"{IMAGES_URL}{unknown}").status_code == 404
    assert client.get(f"{IMAGES_URL}{unknown}/file").status_code == 404
    assert client.delete(f"{IMAGES_URL}{unknown}").status_code == 404


def test_delete_image(client, session, png_bytes):
    image_id = post_image(client, png_bytes, "picture.png", "image/png").json()["id"]

    response = client.delete(f"{IMAGES_URL}{image_id}")
    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert session.exec(select(ImageFile)).all() == []


def test_file_lifecycle(client):
    response = client.post(FILES_URL, files={"file": ("notes.txt", b"some notes", "text/plain")})
    assert response.status_code == 200
    body = response.json()
    assert body["file_name"] == "notes.txt"
    assert body["file_size"] == len(b"some notes")

    content = client.get(f"{FILES_URL}{body['id']}/file")
    assert content.content == b"some notes"

    assert client.delete(f"{FILES_URL}{body['id']}").json() == {"success": True}
    assert client.get(f"{FILES_URL}{body['id']}").status_code == 404


def test_download_image_with_non_ascii_file_name(client, png_bytes):
    file_name = "照片.png"
    image_id = post_image(client, png_bytes, file_name, "image/png").json()["id"]

    assert client.get(f"{IMAGES_URL}{image_id}").json()["file_name"] == file_name

    response = client.get(f"{IMAGES_URL}{image_id}/file")
    assert response.status_code == 200
    assert response.content == png_bytes
    assert response.headers["content-disposition"] == f"inline; filename*=UTF-8''{quote(file_name)}"


def test_download_file_with_non_ascii_file_name(client):
    file_name = "résumé—final.txt"
    body = client.post(FILES_URL, files={"file": (file_name, b"cv", "text/plain")}).json()

    assert body["file_name"] == file_name

    response = client.get(f"{FILES_URL}{body['id']}/file")
    assert response.status_code == 200
    assert response.content == b"cv"

    disposition = response.headers["content-disposition"]
    assert disposition == f"attachment; filename*=UTF-8''{quote(file_name, safe='')}"
