import json
import os
import tempfile
import threading
from contextlib import contextmanager
from typing import Iterator

import pydantic
import structlog

from poker_league.core.errors import ConcurrentModificationError, StorageError
from poker_league.models.document_model import DocumentModel

logger = structlog.get_logger(__name__)

DATA_DIR = "data"
DATA_FILE = os.path.join(DATA_DIR, "data.json")


class DocumentStore:
    """
    Loads and saves the entire application document as one JSON file.

    Every mutation goes through transaction(), which holds a single writer
    lock from load to save. Saves are atomic (temp file + rename) and refuse
    to overwrite a file whose version moved on since the document was loaded.
    """

    def __init__(self, data_file_path: str = DATA_FILE):
        self.data_file_path = data_file_path
        self._lock = threading.RLock()
        directory = os.path.dirname(self.data_file_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not os.path.exists(self.data_file_path):
            self.save(DocumentModel())

    def _read_raw(self) -> str:
        try:
            with open(self.data_file_path, "r", encoding="utf-8") as f:
                return f.read()
        except FileNotFoundError:
            return ""
        except (OSError, UnicodeDecodeError) as e:
            logger.error("store_load_failed", path=self.data_file_path, error=str(e))
            raise StorageError(f"Could not read {self.data_file_path}: {e}") from e

    def _persisted_version(self) -> int:
        content = self._read_raw()
        if not content.strip():
            return 0
        try:
            return int(json.loads(content).get("version", 0))
        except (ValueError, TypeError, AttributeError) as e:
            raise StorageError(f"Data file {self.data_file_path} is corrupt.") from e

    def load(self) -> DocumentModel:
        """Returns a freshly parsed document; callers may mutate it freely."""
        content = self._read_raw()
        if not content.strip():
            return DocumentModel()
        try:
            return DocumentModel.model_validate_json(content)
        except pydantic.ValidationError as e:
            logger.error("store_load_failed", path=self.data_file_path, error=str(e))
            raise StorageError(f"Data file {self.data_file_path} is corrupt.") from e

    def save(self, document: DocumentModel) -> None:
        with self._lock:
            persisted = self._persisted_version()
            if persisted != document.version:
                logger.warning(
                    "store_version_conflict",
                    expected=document.version,
                    persisted=persisted,
                )
                raise ConcurrentModificationError(
                    f"Document version {document.version} is stale (file is at {persisted})."
                )

            payload = document.model_copy(update={"version": document.version + 1})
            directory = os.path.dirname(self.data_file_path) or "."
            fd, temp_path = tempfile.mkstemp(dir=directory, prefix=".data-", suffix=".json")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload.model_dump_json(by_alias=True, indent=2))
                os.replace(temp_path, self.data_file_path)
            except OSError as e:
                if os.path.exists(temp_path):
                    os.remove(temp_path)
                logger.error("store_save_failed", path=self.data_file_path, error=str(e))
                raise StorageError(f"Could not write {self.data_file_path}: {e}") from e

            document.version = payload.version
            logger.debug("store_saved", path=self.data_file_path, version=document.version)

    @contextmanager
    def transaction(self) -> Iterator[DocumentModel]:
        """
        Load, yield for mutation, save. Nothing is written if the block raises.
        """
        with self._lock:
            document = self.load()
            yield document
            self.save(document)
