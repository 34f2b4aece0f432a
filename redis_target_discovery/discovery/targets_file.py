"""Targets loaded from a comma-separated file: address[,password[,alias]]."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from ..exceptions import TargetFileError, TargetFileParseError
from .models import TargetList

logger = logging.getLogger(__name__)


def load_redis_file(path: str | Path) -> TargetList:
    """Read one target per row. Rows with no fields or more than three are skipped."""
    result = TargetList()
    try:
        f = open(path, newline="", encoding="utf-8")
    except OSError as exc:
        raise TargetFileError(f"Cannot open target file {path}: {exc}", path=str(path)) from exc

    with f:
        reader = csv.reader(f, strict=True)
        try:
            records = list(reader)
        except csv.Error as exc:
            raise TargetFileParseError(
                f"Malformed target file {path} at line {reader.line_num}: {exc}",
                path=str(path),
                line=reader.line_num,
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise TargetFileError(f"Cannot read target file {path}: {exc}", path=str(path)) from exc

    for lineno, record in enumerate(records, start=1):
        if len(record) == 3:
            result.add(record[0], record[1], record[2])
        elif len(record) == 2:
            result.add(record[0], record[1], "")
        elif len(record) == 1:
            result.add(record[0], "", "")
        else:
            logger.debug("Skipping record %d of %s with %d fields", lineno, path, len(record))

    logger.info("Loaded %d targets from file", len(result), extra={"path": str(path)})
    return result
