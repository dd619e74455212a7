"""
Upload Store
- POST /upload : store a file under a generated token
- GET /list, /deletelist : enumerate a folder
- GET /file/{token} : download a stored file
- DELETE /delete/{token}, /deleteall : remove one file or a whole folder

The upload response's `fileId` is the storage token, the value /file/{token}
and /delete/{token} accept. The id of the (filename, path) metadata row is
returned separately as `recordId` (null when METADATA_DB is empty); it is
never used to look files up.

Every route except /upload reads an optional `userFolder` from the JSON body
or, failing that, from the query string.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_exception_handlers
from app.api.routes.files import router as files_router
from app.core.config import Settings, settings
from app.core.logging import configure_logging
from app.services.filestore import FileStore
from app.services.locator import StorageLocator
from app.services.metadata import MetadataStore

logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    store: FileStore = app.state.filestore
    store.locator.ensure_folder()
    if store.metadata is not None:
        store.metadata.open()
    try:
        yield
    finally:
        if store.metadata is not None:
            store.metadata.close()

def create_app(cfg: Optional[Settings] = None) -> FastAPI:
    cfg = cfg or settings
    configure_logging(cfg.LOG_LEVEL, cfg.LOG_FILE or None)

    locator = StorageLocator(cfg.STORAGE_ROOT, cfg.DEFAULT_FOLDER, confine=cfg.CONFINE_FOLDERS)
    if not cfg.CONFINE_FOLDERS:
        logger.warning(f"CONFINE_FOLDERS is off: userFolder is joined verbatim and may escape {locator.base_dir}")
    metadata = MetadataStore(cfg.METADATA_DB) if cfg.METADATA_DB else None

    app = FastAPI(title="Upload Store", version="0.1.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS, allow_credentials=True,
        allow_methods=["*"], allow_headers=["*"],
    )

    app.state.settings = cfg
    app.state.filestore = FileStore(locator, metadata=metadata, chunk_size=cfg.COPY_CHUNK_SIZE)

    register_exception_handlers(app)
    app.include_router(files_router, tags=["files"])

    @app.get("/health")
    def health():
        return {"status": "ok"}

    return app

app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.PORT)
