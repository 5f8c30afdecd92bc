"""Cutting job file loading.

A job file goes through three stages: reading, JSON decoding and schema
validation. Each stage raises ConfigError with its own ``error_type`` so
callers (CLI, REST) can render the failure without parsing messages.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from stonecut.application.config.schema import CuttingJobConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a cutting job cannot be loaded.

    Attributes:
        message: Human readable summary.
        error_type: One of file_not_found, permission_denied,
            file_read_error, json_parse, validation.
        path: The job file, when the job came from disk.
        details: Structured entries. JSON errors carry line/column/message;
            validation errors carry path/message/value/error_type.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _json_path(loc: tuple[str | int, ...]) -> str:
    """Render a Pydantic ``loc`` as ``slab_cuts[0].standard_dimensions[1].quantity``."""
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        elif path:
            path += f".{segment}"
        else:
            path = str(segment)
    return path


def _describe(error: PydanticValidationError) -> list[dict[str, Any]]:
    return [
        {
            "path": _json_path(item["loc"]),
            "message": item["msg"],
            "value": item.get("input"),
            "error_type": item["type"],
        }
        for item in error.errors()
    ]


def _summarize(details: list[dict[str, Any]]) -> str:
    lines = [f"Cutting job has {len(details)} invalid field(s):"]
    for detail in details:
        line = f"  - {detail['path'] or '(root)'}: {detail['message']}"
        value = detail.get("value")
        # Nested inputs would repeat the whole subtree.
        if value is not None and not isinstance(value, (dict, list)):
            line += f" (got: {value!r})"
        lines.append(line)
    return "\n".join(lines)


def _read_job_text(path: Path) -> str:
    if not path.exists():
        raise ConfigError(
            message=f"Job file not found: {path}",
            error_type="file_not_found",
            path=path,
        )
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(
            message=f"Permission denied reading job file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except OSError as e:
        raise ConfigError(
            message=f"Could not read job file {path}: {e}",
            error_type="file_read_error",
            path=path,
        )


def _decode_json(content: str, path: Path) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise ConfigError(
            message=f"Invalid JSON in {path} at line {e.lineno}, column {e.colno}: {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate_job(data: Any, path: Path | None = None) -> CuttingJobConfiguration:
    try:
        return CuttingJobConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _describe(e)
        logger.debug("Job validation failed with %d error(s)", len(details))
        raise ConfigError(
            message=_summarize(details),
            error_type="validation",
            path=path,
            details=details,
        )


def load_config(path: Path) -> CuttingJobConfiguration:
    """Load and validate a cutting job from a JSON file.

    Args:
        path: Path to the job file.

    Returns:
        The validated job.

    Raises:
        ConfigError: If the file is missing or unreadable, is not valid
            JSON, or does not match the job schema.
    """
    config = _validate_job(_decode_json(_read_job_text(path), path), path)
    logger.debug("Loaded cutting job %s: %s", path, config.summary())
    return config


def load_config_from_dict(data: dict[str, Any]) -> CuttingJobConfiguration:
    """Validate a cutting job given as a dictionary (API requests, tests).

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate_job(data)
