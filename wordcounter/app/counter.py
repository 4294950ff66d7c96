import re
import logging
from typing import Dict, Iterable, Iterator, List

log = logging.getLogger("wordcounter.counter")

# Delimitadores: espacio , . ; : ! ?
DELIMITERS = re.compile(r"[ ,.;:!?]")

def read_lines(text: str) -> Iterator[str]:
    """Itera las líneas del texto (\\n, \\r\\n o \\r), sin el terminador."""
    if not text:
        return
    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = normalized.split("\n")
    # un terminador final no abre una línea nueva
    if lines and lines[-1] == "":
        lines.pop()
    yield from lines

def split_line(line: str) -> List[str]:
    tokens = []
    for fragment in DELIMITERS.split(line):
        if not fragment:
            continue
        word = fragment.lower().strip()
        if word:
            tokens.append(word)
    return tokens

def count_words(lines: Iterable[str]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    total = 0
    for line in lines:
        for word in split_line(line):
            counts[word] = counts.get(word, 0) + 1
            total += 1
    log.debug("counted tokens=%d unique=%d", total, len(counts))
    return counts

def format_counts(counts: Dict[str, int], line_terminator: str = "\r\n", sort: bool = False) -> str:
    """Una línea "<palabra>: <n>" por entrada, todas terminadas (incluida la última).

    Por defecto respeta el orden del dict (orden de inserción); con sort=True
    ordena por palabra para obtener una salida estable byte a byte.
    """
    items = sorted(counts.items()) if sort else counts.items()
    return "".join(f"{word}: {n}{line_terminator}" for word, n in items)
