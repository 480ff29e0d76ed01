"""JSON file helpers shared by configuration loading and CLI output."""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

T = TypeVar('T', bound=BaseModel)
logger = logging.getLogger('goalcrush.utils')


def load_json(
    path: Path | str,
    schema: type[T] | None = None,
) -> Any | T:
    """
    Load a JSON file, optionally validating it against a pydantic model.

    Args:
        path: Path to the JSON file
        schema: Optional pydantic model the top-level object must satisfy

    Returns:
        Parsed JSON, or a model instance when a schema is given

    Raises:
        FileNotFoundError: If the file doesn't exist
        json.JSONDecodeError: If the JSON is malformed
        ValueError: If schema validation fails
    """
    path = Path(path)
    logger.debug(f'Loading JSON from: {path}')

    if not path.exists():
        logger.error(f'File not found: {path}')
        raise FileNotFoundError(f'File not found: {path}')

    try:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f'Invalid JSON in {path}: {e.msg} at position {e.pos}')
        raise

    if schema is None:
        return data

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.error(f'Schema validation failed for {path}: {e}')
        raise ValueError(f'Schema validation failed for {path}:\n{e}') from e


def save_json(path: Path | str, data: Any, indent: int = 2) -> None:
    """
    Write data as JSON, creating parent directories as needed.

    Pydantic models are dumped in JSON mode so dates serialize as strings.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    payload = data.model_dump(mode='json') if isinstance(data, BaseModel) else data

    try:
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(payload, f, indent=indent, ensure_ascii=False)
    except TypeError as e:
        logger.error(f'Data is not JSON-serializable: {e}')
        raise

    logger.debug(f'Saved JSON to: {path}')
