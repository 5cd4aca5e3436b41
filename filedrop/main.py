import logging
import sys

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from filedrop.config import Settings, MissingCredential, ListenFailure, load_settings
from filedrop.routes import health, upload

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


async def plain_http_error(request: Request, exc: StarletteHTTPException):
    return PlainTextResponse(
        str(exc.detail),
        status_code=exc.status_code,
        headers=exc.headers,
    )


def create_app(settings: Settings) -> FastAPI:
    app = FastAPI(title="filedrop", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    app.add_exception_handler(StarletteHTTPException, plain_http_error)
    app.include_router(health.router)
    app.include_router(upload.router)
    return app


def main():
    try:
        settings = load_settings()
    except MissingCredential as e:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logger.critical("%s", e)
        sys.exit(1)

    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    try:
        port = settings.listen_port()
    except ListenFailure as e:
        logger.critical("Server failed: %s", e)
        sys.exit(1)

    app = create_app(settings)
    logger.info("CDN started on :%s", port)
    try:
        uvicorn.run(app, host="0.0.0.0", port=port, log_config=None)
    except OSError as e:
        logger.critical("Server failed: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
