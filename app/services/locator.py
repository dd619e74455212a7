# app/services/locator.py
"""
Maps (folder, token, extension) to a concrete path under the storage root.

Stored files are named ``<token><extension>``. Tokens never contain a dot,
so everything before the first dot of a stored filename is its token; the
extension length never has to be guessed.
"""
import logging
from pathlib import Path, PurePath
from typing import Optional, Union

from app.core.errors import InvalidFolder

logger = logging.getLogger(__name__)


def extension_of(original_name: Optional[str]) -> str:
    """Substring from the last '.' of the basename onward, or '' if none."""
    if not original_name:
        return ""
    name = original_name.replace("\\", "/").rsplit("/", 1)[-1]
    idx = name.rfind(".")
    # dotfiles like ".env" have no extension
    if idx <= 0:
        return ""
    return name[idx:]


def token_of(filename: str) -> str:
    return filename.split(".", 1)[0]


class StorageLocator:
    def __init__(self, base_dir: Union[str, Path], default_folder: str = "uploads", confine: bool = True):
        self.base_dir = Path(base_dir).resolve()
        self.default_folder = default_folder
        self.confine = confine

    def folder_name(self, folder: Optional[str] = None) -> str:
        return folder if folder else self.default_folder

    def folder_path(self, folder: Optional[str] = None) -> Path:
        name = self.folder_name(folder)
        # the OS rejects these with ValueError, not OSError
        if "\x00" in name:
            raise InvalidFolder(f"Folder name contains a null byte: {name!r}")
        if not self.confine:
            # verbatim join; an absolute or "../" name escapes the root
            return self.base_dir / name

        rel = PurePath(name)
        if rel.is_absolute() or ".." in rel.parts:
            raise InvalidFolder(f"Folder escapes storage root: {name!r}")
        path = (self.base_dir / rel).resolve()
        if self.base_dir not in path.parents:
            raise InvalidFolder(f"Folder escapes storage root: {name!r}")
        return path

    def ensure_folder(self, folder: Optional[str] = None) -> Path:
        path = self.folder_path(folder)
        path.mkdir(parents=True, exist_ok=True)
        return path

    def resolve(self, folder: Optional[str], token: str, extension: str = "") -> Path:
        return self.folder_path(folder) / f"{token}{extension}"
