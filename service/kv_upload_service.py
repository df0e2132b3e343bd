# service/kv_upload_service.py
import logging
from pydantic_core import PydanticSerializationError
from model.kv import KVNamespace
from repository.workers_kv_repository import WorkersKVRepository
from util.errors import (
    NamespaceResolutionError,
    RemoteApiError,
    SerializationError,
    WriteError,
)
from util.timing import timed
from util.types import KVFiles

logger = logging.getLogger(__name__)


class KVUploadService:
    def __init__(self, repository: WorkersKVRepository) -> None:
        self._repo = repository

    def find_or_create_namespace(self, name: str) -> KVNamespace:
        """
        Return the namespace titled `name`, creating it when none exists.

        Titles are not unique on Cloudflare's side; when several namespaces share
        the title, the last one in listing order is used.
        """
        try:
            existing = self._repo.list_namespaces()
        except RemoteApiError as e:
            logger.error("namespace.list.error title=%s", name)
            raise NamespaceResolutionError(
                name, "error getting the list of namespaces"
            ) from e

        namespace = None
        for candidate in existing:
            if candidate.title == name:
                namespace = candidate

        if namespace is not None:
            logger.info("namespace.found title=%s id=%s", name, namespace.id)
            return namespace

        logger.info("namespace.create title=%s", name)
        try:
            namespace = self._repo.create_namespace(name)
        except RemoteApiError as e:
            logger.error("namespace.create.error title=%s", name)
            raise NamespaceResolutionError(name, "error with creating namespace") from e

        logger.info("namespace.created title=%s id=%s", name, namespace.id)
        return namespace

    def upload(self, namespace_id: str, files: KVFiles) -> int:
        """
        Write every record as one key, in mapping order.
        The first failure aborts the run; keys already written stay written.
        """
        total = len(files)
        with timed(logger, "kv.upload", namespace=namespace_id, files=total):
            for n, (key, file) in enumerate(files.items(), start=1):
                try:
                    payload = file.model_dump_json().encode("utf-8")
                except PydanticSerializationError as e:
                    raise SerializationError(key) from e

                logger.info("kv.write key=%s n=%d/%d", key, n, total)
                try:
                    self._repo.write_value(namespace_id, key, payload)
                except RemoteApiError as e:
                    logger.error("kv.write.error key=%s status=%s", key, e.status_code)
                    raise WriteError(key) from e
        return total
