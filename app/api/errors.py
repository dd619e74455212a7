"""
Translate storage errors into HTTP responses.

Client mistakes get a short message; anything 500-class is logged with its
traceback and answered with a generic body.
"""
import logging

from fastapi import FastAPI, Request
from starlette.responses import JSONResponse, PlainTextResponse

from app.core.errors import FileStoreError, InvalidFolder, MetadataError, MissingFile, NotFound

logger = logging.getLogger(__name__)


async def handle_missing_file(request: Request, exc: MissingFile):
    return JSONResponse(status_code=400, content={"message": "Please provide a file"})


async def handle_invalid_folder(request: Request, exc: InvalidFolder):
    logger.warning(f"Rejected folder on {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content={"message": "Invalid folder name"})


async def handle_not_found(request: Request, exc: NotFound):
    return PlainTextResponse("File not found", status_code=404)


async def handle_metadata_error(request: Request, exc: MetadataError):
    logger.error(f"Upload stored but metadata record failed: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


async def handle_store_error(request: Request, exc: FileStoreError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MissingFile, handle_missing_file)
    app.add_exception_handler(InvalidFolder, handle_invalid_folder)
    app.add_exception_handler(NotFound, handle_not_found)
    app.add_exception_handler(MetadataError, handle_metadata_error)
    # StorageWriteError, ListError, DeleteError
    app.add_exception_handler(FileStoreError, handle_store_error)
