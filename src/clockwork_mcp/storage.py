"""Locate Clockwork storage from settings and build the Storage handle."""

from pathlib import Path
from typing import Optional

from clockwork_core.storage import FileStorage

from .exceptions import StorageNotFoundError
from .settings import settings

CLOCKWORK_STORAGE_SUBDIR = Path("storage") / "clockwork"


def resolve_storage_path(
    storage_path: Optional[str] = None,
    project_path: Optional[str] = None,
) -> Path:
    """Explicit storage path, else ``<project>/storage/clockwork``, else ``./storage/clockwork``."""
    if storage_path:
        return Path(storage_path).expanduser()
    if project_path:
        return Path(project_path).expanduser() / CLOCKWORK_STORAGE_SUBDIR
    return Path.cwd() / CLOCKWORK_STORAGE_SUBDIR


def get_storage_path() -> Path:
    return resolve_storage_path(settings.CLOCKWORK_STORAGE_PATH, settings.CLOCKWORK_PROJECT_PATH)


def get_storage() -> FileStorage:
    """FileStorage over the configured directory; raises if it does not exist."""
    path = get_storage_path()
    if not path.is_dir():
        raise StorageNotFoundError(str(path))
    return FileStorage(path)
