# app/services/filestore.py
import logging
import os
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Optional

from app.core.errors import (
    DeleteError,
    ListError,
    MissingFile,
    NotFound,
    StorageWriteError,
)
from app.services.identifiers import generate_token, is_token
from app.services.locator import StorageLocator, extension_of, token_of
from app.services.metadata import MetadataStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredFile:
    token: str
    folder: str
    filename: str
    path: Path


@dataclass(frozen=True)
class UploadResult:
    file: StoredFile
    record_id: Optional[int] = None


@dataclass(frozen=True)
class DeleteFailure:
    filename: str
    reason: str


@dataclass
class DeleteAllResult:
    folder: str
    deleted: List[str] = field(default_factory=list)
    errors: List[DeleteFailure] = field(default_factory=list)

    @property
    def deleted_count(self) -> int:
        return len(self.deleted)

    @property
    def ok(self) -> bool:
        return not self.errors


class FileStore:
    """
    Storage-facing half of every endpoint. Holds no state about which files
    exist; each call reads or changes the folder on disk and nothing else.
    """

    def __init__(
        self,
        locator: StorageLocator,
        metadata: Optional[MetadataStore] = None,
        chunk_size: int = 1024 * 1024,
    ):
        self.locator = locator
        self.metadata = metadata
        self.chunk_size = chunk_size

    # ------------------- UPLOAD -------------------

    def save(self, stream: Optional[BinaryIO], original_name: Optional[str], folder: Optional[str] = None) -> StoredFile:
        if stream is None:
            raise MissingFile("Please provide a file")

        name = self.locator.folder_name(folder)
        path = self.locator.resolve(folder, generate_token(), extension_of(original_name))
        try:
            self.locator.ensure_folder(folder)
            # "x" refuses to clobber an existing file on a token collision
            with open(path, "xb") as out:
                shutil.copyfileobj(stream, out, self.chunk_size)
        except (OSError, ValueError) as e:
            logger.error(f"Failed to write upload to {path}: {e}")
            raise StorageWriteError(str(e)) from e

        logger.info(f"Stored {original_name!r} as {path.name} in folder {name!r}")
        return StoredFile(token=token_of(path.name), folder=name, filename=path.name, path=path)

    def upload(self, stream: Optional[BinaryIO], original_name: Optional[str], folder: Optional[str] = None) -> UploadResult:
        """
        Save the stream, then record (filename, path) in the metadata store if
        one is configured. A metadata failure raises MetadataError but leaves
        the written file in place.
        """
        stored = self.save(stream, original_name, folder)
        if self.metadata is None:
            return UploadResult(file=stored)
        record_id = self.metadata.record(stored.filename, str(stored.path))
        return UploadResult(file=stored, record_id=record_id)

    # ------------------- RETRIEVE -------------------

    def find(self, token: str, folder: Optional[str] = None) -> StoredFile:
        if not is_token(token):
            raise NotFound(f"Not a file token: {token!r}")

        name = self.locator.folder_name(folder)
        directory = self.locator.folder_path(folder)
        try:
            with os.scandir(directory) as it:
                for entry in it:
                    if token_of(entry.name) == token and entry.is_file():
                        return StoredFile(token=token, folder=name, filename=entry.name, path=Path(entry.path))
        except (OSError, ValueError) as e:
            logger.debug(f"Lookup of {token} in {directory} failed: {e}")
        raise NotFound(f"No file {token} in folder {name!r}")

    # ------------------- LIST -------------------

    def list_files(self, folder: Optional[str] = None) -> List[StoredFile]:
        """Single point-in-time snapshot, in directory enumeration order."""
        name = self.locator.folder_name(folder)
        directory = self.locator.folder_path(folder)
        try:
            with os.scandir(directory) as it:
                return [
                    StoredFile(token=token_of(e.name), folder=name, filename=e.name, path=Path(e.path))
                    for e in it
                    if e.is_file()
                ]
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read folder {directory}: {e}")
            raise ListError(str(e)) from e

    # ------------------- DELETE -------------------

    def delete(self, token: str, folder: Optional[str] = None) -> StoredFile:
        try:
            stored = self.find(token, folder)
            stored.path.unlink()
        except NotFound as e:
            raise DeleteError(str(e)) from e
        except OSError as e:
            logger.error(f"Error deleting file {token}: {e}")
            raise DeleteError(str(e)) from e
        logger.info(f"Deleted {stored.filename} from folder {stored.folder!r}")
        return stored

    def delete_all(self, folder: Optional[str] = None) -> DeleteAllResult:
        """
        Remove every file in the folder. Each removal is independent: a failed
        entry is logged and collected, and the loop carries on.
        """
        entries = self.list_files(folder)
        result = DeleteAllResult(folder=self.locator.folder_name(folder))
        for stored in entries:
            try:
                stored.path.unlink()
            except OSError as e:
                logger.error(f"Error deleting file: {stored.path} ({e})")
                result.errors.append(DeleteFailure(filename=stored.filename, reason=str(e)))
            else:
                result.deleted.append(stored.filename)

        logger.info(
            f"Bulk delete in {result.folder!r}: {result.deleted_count} removed, {len(result.errors)} failed"
        )
        return result
