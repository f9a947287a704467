"""File intake: turn user-selected paths or uploads into in-memory files."""
import mimetypes
from pathlib import Path
from typing import Iterable, List, Optional

from .models import InputFile, PDF_MIME_TYPE
from statementai.utils.logger import get_logger
from statementai.utils.exceptions import DocumentError

logger = get_logger()

ACCEPTED_EXTENSIONS = (".pdf",)
ACCEPTED_MIME_PREFIX = "image/"


def guess_mime_type(file_name: str, declared: Optional[str] = None) -> str:
    """Resolve a file's MIME type, trusting the name over a generic declared type."""
    if declared and declared not in ("application/octet-stream", "binary/octet-stream"):
        return declared

    if Path(file_name).suffix.lower() in ACCEPTED_EXTENSIONS:
        return PDF_MIME_TYPE

    guessed, _ = mimetypes.guess_type(file_name)
    return guessed or "application/octet-stream"


def is_supported(mime_type: str) -> bool:
    """Accepted inputs are PDFs and any raster image type."""
    return mime_type == PDF_MIME_TYPE or mime_type.startswith(ACCEPTED_MIME_PREFIX)


def from_upload(file_name: str, content: bytes, content_type: Optional[str] = None) -> InputFile:
    """Wrap an uploaded file body."""
    return InputFile(
        name=file_name,
        content=content,
        mime_type=guess_mime_type(file_name, content_type)
    )


def read_files(paths: Iterable[Path]) -> List[InputFile]:
    """
    Read statement files from disk.

    Args:
        paths: Paths selected by the user

    Returns:
        In-memory files in the order given

    Raises:
        DocumentError: If a path does not exist or cannot be read
    """
    files = []
    for path in paths:
        path = Path(path)
        if not path.is_file():
            raise DocumentError(f"File not found: {path}")

        try:
            content = path.read_bytes()
        except OSError as e:
            raise DocumentError(f"Failed to read {path.name}: {e}")

        files.append(InputFile(
            name=path.name,
            content=content,
            mime_type=guess_mime_type(path.name)
        ))
        logger.debug(f"Read {len(content)} bytes from {path.name}")

    return files


def accept_files(files: Iterable[InputFile]) -> List[InputFile]:
    """Keep PDFs and images, skipping everything else."""
    accepted = []
    for input_file in files:
        if is_supported(input_file.mime_type):
            accepted.append(input_file)
        else:
            logger.warning(f"Skipping unsupported file {input_file.name} ({input_file.mime_type})")
    return accepted
