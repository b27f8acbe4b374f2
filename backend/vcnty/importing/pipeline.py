# backend/vcnty/importing/pipeline.py
import structlog

from vcnty.errors import BackendAPIError
from .readers import read_upload
from .reconcile import build_header_map, ignored_columns, map_headers
from .validation import validate_row

logger = structlog.get_logger(__name__)


def validate_rows(normalized: list[dict], location: dict | None = None):
    """
    Run every normalized row through validate_row in file order.
    Returns (accepted items, all error strings, rejected row count).
    """
    accepted = []
    errors: list[str] = []
    failed = 0
    for i, row in enumerate(normalized, start=1):
        item, row_errors = validate_row(row, i, location=location)
        if row_errors:
            failed += 1
            errors.extend(row_errors)
        else:
            accepted.append(item)
    return accepted, errors, failed


def run_import(raw_rows: list, store_id: str, location: dict, client, token: str | None = None) -> dict:
    """
    Reconcile headers, validate every row, then submit the accepted rows as
    ONE batch. Returns the import report:

        {"total", "success", "failed", "errors", "ignored_columns"}

    A failed batch call marks every row failed (nothing was persisted) and
    appends "Network Error: ..." after the row errors. Nothing is retried.
    """
    header_map = build_header_map(raw_rows)
    normalized = map_headers(raw_rows, header_map)
    total = len(normalized)

    accepted, errors, failed = validate_rows(normalized, location=location)
    skipped = ignored_columns(header_map)
    if skipped:
        logger.info("import_columns_ignored", store_id=store_id, columns=skipped)
    if failed:
        logger.info("import_rows_rejected", store_id=store_id, rejected=failed, total=total)

    report = {
        "total": total,
        "success": 0,
        "failed": failed,
        "errors": errors,
        "ignored_columns": skipped,
    }
    if not accepted:
        return report

    try:
        client.create_items_batch(store_id, [item.to_payload() for item in accepted], token=token)
    except BackendAPIError as e:
        logger.error("import_batch_failed", store_id=store_id, items=len(accepted), error=e.message)
        report["success"] = 0
        report["failed"] = total
        report["errors"] = errors + [f"Network Error: {e.message or 'Unknown'}"]
        return report

    logger.info("import_batch_submitted", store_id=store_id, items=len(accepted), total=total)
    report["success"] = len(accepted)
    return report


def import_file(filename: str, data: bytes, store_id: str, location: dict, client,
                token: str | None = None, max_bytes: int | None = None) -> dict:
    rows = read_upload(filename, data, max_bytes=max_bytes)
    return run_import(rows, store_id, location, client, token=token)
