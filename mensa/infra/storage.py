"""File storage adapters scoped to a single base directory.

The plan cache only ever talks to one of these: ``read`` / ``write`` /
``list_files`` by plain file name. A missing file is reported as
``FileNotFoundError``; every other failure is raised as-is.
"""
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Dict, List, Optional, Union

from mensa.utilities.constants import CACHE_FILE_ENCODING

logger = logging.getLogger(__name__)


class StorageError(OSError):
    """A storage fault that is not a plain "file does not exist"."""


class StorageAdapter:
    def init(self) -> None:
        """Prepare the storage. Calling it again is harmless."""

    def read(self, name: str) -> str:
        raise NotImplementedError

    def write(self, name: str, data: str) -> None:
        raise NotImplementedError

    def list_files(self) -> List[str]:
        raise NotImplementedError


def _check_name(name: str) -> str:
    if not name or name in ('.', '..') or '/' in name or os.sep in name:
        raise ValueError(f"invalid file name: {name!r}")
    return name


class DirectoryAdapter(StorageAdapter):
    """Storage backed by the files of one directory."""

    def __init__(self, base_dir: Union[str, Path], encoding: str = CACHE_FILE_ENCODING):
        self.base_dir = Path(base_dir)
        self.encoding = encoding

    def init(self) -> None:
        self.base_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, name: str) -> Path:
        return self.base_dir / _check_name(name)

    def read(self, name: str) -> str:
        path = self._path(name)
        try:
            with open(path, 'r', encoding=self.encoding) as f:
                return f.read()
        except FileNotFoundError:
            # a dangling symlink is broken storage, not a missing entry
            if path.is_symlink():
                raise StorageError(f"broken symlink: {path}") from None
            raise

    def write(self, name: str, data: str) -> None:
        """Replace the file atomically: readers see the old or the new content, never a mix."""
        path = self._path(name)
        self.init()
        fd, tmp_path = tempfile.mkstemp(dir=self.base_dir, prefix=f".{name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, 'w', encoding=self.encoding) as tmp:
                tmp.write(data)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, path)
        except BaseException:
            try:
                os.remove(tmp_path)
            except OSError as e:
                logger.warning("Could not remove temporary file %s: %s", tmp_path, e)
            raise

    def list_files(self) -> List[str]:
        try:
            entries = list(os.scandir(self.base_dir))
        except FileNotFoundError:
            return []
        return [entry.name for entry in entries if entry.is_file()]


class MemoryAdapter(StorageAdapter):
    """Storage kept in a dict, for tests and throwaway caches."""

    def __init__(self, files: Optional[Dict[str, str]] = None):
        self.files: Dict[str, str] = dict(files or {})
        self._lock = threading.Lock()

    def read(self, name: str) -> str:
        with self._lock:
            try:
                return self.files[_check_name(name)]
            except KeyError:
                raise FileNotFoundError(name) from None

    def write(self, name: str, data: str) -> None:
        if not isinstance(data, str):
            raise TypeError(f"data must be str, not {type(data).__name__}")
        with self._lock:
            self.files[_check_name(name)] = data

    def list_files(self) -> List[str]:
        with self._lock:
            return list(self.files)
