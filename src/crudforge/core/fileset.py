"""
Schema file discovery.

A schema is either one file or a directory of ``*.prisma`` fragments.
"""

import logging
from pathlib import Path

from .errors import SchemaUnreadableError

logger = logging.getLogger(__name__)

SCHEMA_SUFFIX = ".prisma"


def discover_schema_files(path: Path) -> list[Path]:
    """List the schema files at a path, fragments of a directory in name order."""
    if not path.exists():
        raise SchemaUnreadableError(f"Schema path does not exist: {path}")
    if path.is_file():
        return [path]
    files = sorted(p for p in path.iterdir() if p.is_file() and p.suffix == SCHEMA_SUFFIX)
    if not files:
        raise SchemaUnreadableError(f"No {SCHEMA_SUFFIX} files found in directory: {path}")
    return files


def load_schema_text(path: Path) -> str:
    """
    Read a schema file, or concatenate a directory's fragments.

    Raises:
        SchemaUnreadableError: If nothing readable is found or the text is empty
    """
    files = discover_schema_files(path)
    if len(files) > 1:
        logger.info("Reading schema from %d files in %s", len(files), path)
    try:
        text = "\n".join(p.read_text(encoding="utf-8") for p in files)
    except UnicodeDecodeError as e:
        raise SchemaUnreadableError(f"Schema is not valid UTF-8: {path} ({e.reason})") from e
    except OSError as e:
        raise SchemaUnreadableError(f"Cannot read schema {path}: {e}") from e
    if not text.strip():
        raise SchemaUnreadableError(f"Schema is empty: {path}")
    return text
