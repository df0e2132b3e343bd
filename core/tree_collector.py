# core/tree_collector.py
import base64
import logging
import os
from core.sniff import detect_content_type
from model.kv import KVFile
from util.errors import DirectoryTraversalError, FileReadError, PathNotFoundError
from util.timing import timed
from util.types import KVFiles

logger = logging.getLogger(__name__)


def relative_key(path: str, base_path: str) -> str:
    """
    Strip `base_path` and exactly one following separator from `path`.
    Paths that do not start with the root are returned unchanged.
    """
    root = base_path.rstrip(os.sep) or os.sep
    prefix = root if root.endswith(os.sep) else root + os.sep
    if not path.startswith(prefix):
        return path
    key = path[len(prefix) :]
    if os.sep != "/":
        key = key.replace(os.sep, "/")
    return key


def _read_file(path: str) -> bytes:
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as e:
        logger.error("walk.read.error path=%s err=%s", path, type(e).__name__)
        raise FileReadError(path) from e


def _encode(data: bytes) -> KVFile:
    return KVFile(
        content=base64.b64encode(data).decode("ascii"),
        contentType=detect_content_type(data),
    )


def _raise_traversal(err: OSError) -> None:
    logger.error("walk.listdir.error path=%s err=%s", err.filename, type(err).__name__)
    raise DirectoryTraversalError(str(err.filename)) from err


def build_files_map(base_path: str) -> KVFiles:
    """
    Walk `base_path` depth-first and encode every non-directory entry.

    - Keys are paths relative to the root, "/"-separated.
    - Entries are visited in sorted order, so the mapping order is stable run to run.
    - Symlinks to files are read through; symlinks to directories are neither
      followed nor read.
    - If the root itself is a file, it is the only entry, keyed by its own path.
    """
    try:
        os.stat(base_path)
    except OSError as e:
        logger.error("walk.root.missing path=%s", base_path)
        raise PathNotFoundError(base_path) from e

    files: KVFiles = {}
    root = os.path.normpath(base_path)

    with timed(logger, "walk", root=root):
        if not os.path.isdir(root):
            files[base_path] = _encode(_read_file(base_path))
            return files

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_traversal):
            dirnames.sort()
            for name in sorted(filenames):
                path = os.path.join(dirpath, name)
                files[relative_key(path, root)] = _encode(_read_file(path))
                logger.debug("walk.file path=%s", path)

    logger.info("walk.ok root=%s files=%d", base_path, len(files))
    return files
