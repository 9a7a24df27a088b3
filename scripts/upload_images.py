import mimetypes
import os
import sys

import requests

IMAGE_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".bmp", ".webp"}

def upload_image(base_url, path, dimensions):
    url = f"http://{base_url}/api/v1/images/"
    content_type = mimetypes.guess_type(path)[0] or "application/octet-stream"

    try:
        with open(path, "rb") as image:
            response = requests.post(
                url,
                files={"image": (os.path.basename(path), image, content_type)},
                data={"create_thumbnail": "true", "dimensions": str(dimensions)},
            )
        response.raise_for_status()
        data = response.json()
        print(f"✅ Uploaded image: {data['file_name']} {data['width']}x{data['height']} (ID: {data['id']})")
    except requests.HTTPError as err:
        print(f"❌ Failed to upload {path}: {err} - {response.text}")

def main():
    if len(sys.argv) < 3:
        print("Usage: python upload_images.py <host:port> <directory> [dimensions]")
        sys.exit(1)

    base_url = sys.argv[1]
    directory = sys.argv[2]
    dimensions = int(sys.argv[3]) if len(sys.argv) > 3 else 150

    for name in sorted(os.listdir(directory)):
        if os.path.splitext(name)[1].lower() in IMAGE_EXTENSIONS:
            upload_image(base_url, os.path.join(directory, name), dimensions)

if __name__ == "__main__":
    main()
