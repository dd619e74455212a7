class FileStoreError(Exception):
    """Base class for every storage-facing failure."""


class MissingFile(FileStoreError):
    """The request carried no file payload."""


class InvalidFolder(FileStoreError):
    """A caller-supplied folder name points outside the storage root."""


class StorageWriteError(FileStoreError):
    pass


class MetadataError(FileStoreError):
    """The auxiliary metadata record could not be persisted.

    The uploaded file is already on disk when this is raised.
    """


class NotFound(FileStoreError):
    pass


class ListError(FileStoreError):
    pass


class DeleteError(FileStoreError):
    pass
