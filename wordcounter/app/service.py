import logging
from typing import Optional

from .counter import read_lines, count_words, format_counts
from .errors import InvalidInput, WordCounterError, ProcessingFailure
from .storage import ResultStorage, result_name

log = logging.getLogger("wordcounter.service")

ALLOWED_CONTENT_TYPE = "text/plain"

def validate_upload(filename: Optional[str], content_type: Optional[str], data: Optional[bytes]) -> str:
    """Valida la subida antes de contar y devuelve el texto decodificado."""
    if data is None or not filename:
        raise InvalidInput("File is empty.")
    if len(data) == 0:
        raise InvalidInput("File is empty.")
    media_type = (content_type or "").split(";", 1)[0].strip().lower()
    if media_type != ALLOWED_CONTENT_TYPE:
        raise InvalidInput("Only text/plain files are supported.")
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise InvalidInput("File is not valid UTF-8 text.") from None

async def count_upload(filename: Optional[str], content_type: Optional[str], data: Optional[bytes],
                       storage: ResultStorage, *, line_terminator: str = "\r\n",
                       sort: bool = False) -> str:
    text = validate_upload(filename, content_type, data)
    name = result_name(filename)
    log.info("counting words file=%s bytes=%d result=%s", filename, len(data), name)
    try:
        counts = count_words(read_lines(text))
        content = format_counts(counts, line_terminator=line_terminator, sort=sort)
        return await storage.save(name, content)
    except WordCounterError:
        raise
    except Exception as e:
        raise ProcessingFailure(f"word count failed file={filename}: {e}") from e

async def fetch_result(name: str, storage: ResultStorage) -> bytes:
    log.info("fetching result name=%s", name)
    try:
        content = await storage.read(name)
        return content.encode("utf-8")
    except WordCounterError:
        raise
    except Exception as e:
        raise ProcessingFailure(f"read failed name={name}: {e}") from e
