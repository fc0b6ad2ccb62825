"""ZIP packaging of a generated project directory."""

import io
import logging
import os
import zipfile
from pathlib import Path

from .errors import ProjectGenerationError

logger = logging.getLogger(__name__)

EXECUTABLE_MODE = 0o755
REGULAR_MODE = 0o644


def create_project_zip(project_dir: Path) -> bytes:
    """Pack every regular file under ``project_dir`` into an in-memory ZIP.

    Entries use paths relative to ``project_dir`` in sorted order and keep
    the executable bit (``mvnw`` must stay runnable after extraction).

    Raises:
        ProjectGenerationError: If the directory is missing or a file cannot be read.
    """
    project_dir = Path(project_dir)
    if not project_dir.is_dir():
        raise ProjectGenerationError(f"Project directory does not exist: {project_dir}")

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for path in sorted(p for p in project_dir.rglob("*") if p.is_file()):
                rel = path.relative_to(project_dir).as_posix()
                info = zipfile.ZipInfo(rel)
                info.compress_type = zipfile.ZIP_DEFLATED
                mode = EXECUTABLE_MODE if os.access(path, os.X_OK) else REGULAR_MODE
                info.external_attr = (0o100000 | mode) << 16
                zf.writestr(info, path.read_bytes())
    except OSError as exc:
        raise ProjectGenerationError(f"Failed to create ZIP for {project_dir}: {exc}") from exc

    data = buffer.getvalue()
    logger.info("Created ZIP for project: %s (%d bytes)", project_dir, len(data))
    return data
