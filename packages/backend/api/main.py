from fastapi import APIRouter

from api.routes import files, images

api_router = APIRouter()
api_router.include_router(files.router)
api_router.include_router(images.router)
