import logging
from typing import Annotated

from fastapi import Depends

from core.settings import settings

# child of uvicorn's logger so records share its handlers
logger = logging.getLogger('uvicorn.error.storage')
logger.setLevel(settings.LOG_LEVEL)

def get_logger() -> logging.Logger:
    return logger

LoggerDep = Annotated[logging.Logger, Depends(get_logger)]
