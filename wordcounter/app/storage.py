import os
import re
import uuid
import asyncio
import logging
import pathlib
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Dict, Optional
from urllib.parse import urlparse

import httpx

from .errors import NotFound, ProcessingFailure

log = logging.getLogger("wordcounter.storage")

RESULT_ROUTE = "/wordcounter/getcountresult"

def ensure_dir(p: str):
    pathlib.Path(p).mkdir(parents=True, exist_ok=True)

def result_name(filename: Optional[str]) -> str:
    """Nombre único del artefacto: <stem>-<timestamp UTC>-<hex>.txt"""
    stem = os.path.splitext(os.path.basename(filename or ""))[0]
    stem = re.sub(r"[^A-Za-z0-9_-]+", "_", stem).strip("_") or "result"
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")
    return f"{stem}-{stamp}-{uuid.uuid4().hex[:6]}.txt"

def build_locator(public_base_url: str, name: str) -> str:
    return f"{public_base_url.rstrip('/')}{RESULT_ROUTE}/{name}"

def locator_name(locator: str) -> str:
    """El último segmento del path del locator es el nombre guardado."""
    path = urlparse(locator).path or locator
    return path.rstrip("/").rsplit("/", 1)[-1]

# ---------------------------------------------------------------------------
# Puerto de almacenamiento
# ---------------------------------------------------------------------------
class ResultStorage(ABC):
    backend = "abstract"

    def __init__(self, public_base_url: str):
        self.public_base_url = public_base_url

    @abstractmethod
    async def save(self, name: str, content: str) -> str:
        """Persiste content bajo name y devuelve el locator."""

    @abstractmethod
    async def read(self, name: str) -> str:
        """Devuelve el contenido guardado bajo name; NotFound si no existe."""

class MemoryStorage(ResultStorage):
    backend = "memory"

    def __init__(self, public_base_url: str = "http://localhost"):
        super().__init__(public_base_url)
        self._items: Dict[str, str] = {}

    async def save(self, name: str, content: str) -> str:
        if name in self._items:
            raise ProcessingFailure(f"artifact already exists: {name}")
        self._items[name] = content
        log.debug("memory save name=%s bytes=%d", name, len(content))
        return build_locator(self.public_base_url, name)

    async def read(self, name: str) -> str:
        try:
            return self._items[name]
        except KeyError:
            raise NotFound(f"result not found: {name}") from None

class LocalStorage(ResultStorage):
    backend = "local"

    def __init__(self, base_dir: str, public_base_url: str):
        super().__init__(public_base_url)
        self.base_dir = base_dir

    def _path(self, name: str, error=NotFound) -> str:
        base_abs = os.path.abspath(self.base_dir)
        path = os.path.abspath(os.path.join(base_abs, name))
        # el artefacto debe vivir directamente bajo base_dir
        if not name or os.path.dirname(path) != base_abs:
            raise error(f"invalid result name: {name}")
        return path

    def _write(self, path: str, content: str):
        ensure_dir(os.path.dirname(path))
        # "x": nunca sobrescribir un resultado existente
        with open(path, "x", encoding="utf-8", newline="") as f:
            f.write(content)

    def _read(self, path: str) -> str:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()

    async def save(self, name: str, content: str) -> str:
        path = self._path(name, ProcessingFailure)
        try:
            await asyncio.to_thread(self._write, path, content)
        except FileExistsError as e:
            raise ProcessingFailure(f"artifact already exists: {name}") from e
        except OSError as e:
            raise ProcessingFailure(f"could not write {path}: {e}") from e
        log.info("saved result path=%s", path)
        return build_locator(self.public_base_url, name)

    async def read(self, name: str) -> str:
        path = self._path(name)
        try:
            return await asyncio.to_thread(self._read, path)
        except FileNotFoundError:
            raise NotFound(f"result not found: {name}") from None
        except OSError as e:
            raise ProcessingFailure(f"could not read {path}: {e}") from e

class HttpStorage(ResultStorage):
    """Blob store remoto: PUT/GET <base_url>/<name>."""
    backend = "http"

    def __init__(self, base_url: str, public_base_url: str, timeout: float = 120,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        super().__init__(public_base_url)
        if not base_url:
            raise ValueError("STORAGE_URL is required for the http backend")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def save(self, name: str, content: str) -> str:
        url = f"{self.base_url}/{name}"
        try:
            async with self._client() as client:
                r = await client.put(url, content=content.encode("utf-8"),
                                     headers={"Content-Type": "text/plain; charset=utf-8",
                                              "If-None-Match": "*"})
                r.raise_for_status()
        except httpx.HTTPError as e:
            raise ProcessingFailure(f"remote save failed url={url}: {e}") from e
        log.info("saved result url=%s", url)
        return build_locator(self.public_base_url, name)

    async def read(self, name: str) -> str:
        url = f"{self.base_url}/{name}"
        try:
            async with self._client() as client:
                r = await client.get(url)
                if r.status_code == 404:
                    raise NotFound(f"result not found: {name}")
                r.raise_for_status()
                return r.content.decode("utf-8")
        except httpx.HTTPError as e:
            raise ProcessingFailure(f"remote read failed url={url}: {e}") from e

def build_storage(settings) -> ResultStorage:
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        return MemoryStorage(settings.PUBLIC_BASE_URL)
    if backend == "local":
        return LocalStorage(settings.STORAGE_DIR, settings.PUBLIC_BASE_URL)
    if backend == "http":
        return HttpStorage(settings.STORAGE_URL, settings.PUBLIC_BASE_URL,
                           timeout=settings.HTTP_TIMEOUT_S)
    raise ValueError(f"unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")
