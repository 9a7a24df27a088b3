from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode


class Settings(BaseSettings):
    API_V1_STR: str = "/api/v1"

    # postgres credentials
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "testDB"
    POSTGRES_USER: str = "testUser"
    POSTGRES_PASSWORD: str = "testPassword"

    # overrides the postgres url when set (e.g. sqlite://)
    DATABASE_URL: str | None = None

    # longer edge of generated thumbnails, in pixels
    THUMBNAIL_DIMENSIONS: int = 150

    # level of the storage logger
    LOG_LEVEL: str = "INFO"

    # prevent unauthorized access
    RESTRICT_HOSTS: bool = False
    TRUSTED_HOSTS: Annotated[List[str], NoDecode] = []

    @field_validator('TRUSTED_HOSTS', mode='before')
    @classmethod
    def decode_trusted_hosts(cls, raw: str | list[str]) -> list[str]:
        if type(raw) is str:
            return [host for host in raw.split(',')]
        else:
            return raw

settings = Settings()  # type: ignore
