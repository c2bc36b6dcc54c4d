import uvicorn  # type: ignore

from userhub.core import config
from userhub.utils import get_logger

log = get_logger(__name__)

if __name__ == "__main__":
    log.info("Running server")
    uvicorn.run("userhub.main:app", reload=True, host=config.HOST, port=config.PORT)
