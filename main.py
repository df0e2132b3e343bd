# main.py
import logging
import sys
from config.http_client import build_http_client
from config.settings import load_settings
from core.tree_collector import build_files_map
from repository.workers_kv_repository import WorkersKVRepository
from service.kv_upload_service import KVUploadService
from util.enums import Color, ErrorMessage
from util.errors import AppError, ConfigurationError
from util.logger import init_logger


def _report(logger: logging.Logger, stage: ErrorMessage, err: AppError) -> None:
    cause = f" ({err.__cause__})" if err.__cause__ is not None else ""
    logger.error("%s: %s%s", stage, err, cause)


def run() -> int:
    """Upload TARGET_DIRECTORY into the CF_KV_NAMESPACE Workers KV namespace."""
    try:
        settings = load_settings()
    except ConfigurationError as e:
        print(f"❌ {ErrorMessage.MISSING_ENV}:", file=sys.stderr)
        for line in e.message.splitlines():
            print(f" - {line}", file=sys.stderr)
        return 1

    logger: logging.Logger = init_logger(settings)
    print(f"{Color.GREEN}Collecting files from {settings.TARGET_DIRECTORY}{Color.RESET}")

    try:
        files = build_files_map(settings.TARGET_DIRECTORY)
    except AppError as e:
        _report(logger, ErrorMessage.WALK, e)
        return 1

    with build_http_client(settings) as client:
        service = KVUploadService(
            WorkersKVRepository(client, settings.CF_API_ACCOUNT_ID)
        )

        try:
            namespace = service.find_or_create_namespace(settings.CF_KV_NAMESPACE)
        except AppError as e:
            _report(logger, ErrorMessage.NAMESPACE, e)
            return 1

        try:
            written = service.upload(namespace.id, files)
        except AppError as e:
            _report(logger, ErrorMessage.UPLOAD, e)
            return 1

    print(
        f"{Color.GREEN}All values written to WorkersKV successfully "
        f"({written} keys in {namespace.title}){Color.RESET}"
    )
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
