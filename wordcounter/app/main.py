# wordcounter/app/main.py

import os
import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Depends, File, Request, UploadFile
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from .settings import settings
from .errors import InvalidInput, NotFound, ProcessingFailure
from .service import count_upload, fetch_result
from .storage import ResultStorage, build_storage, RESULT_ROUTE

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("WORDCOUNTER_LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s [wordcounter] %(message)s"
)
log = logging.getLogger("wordcounter")

GENERIC_ERROR = "An error occurred while processing the request."

class Health(BaseModel):
    ok: bool
    storage: str

# ---------------------------------------------------------------------------
# Dependencias
# ---------------------------------------------------------------------------
def get_storage(request: Request) -> ResultStorage:
    return request.app.state.storage

# ---------------------------------------------------------------------------
# Manejo de errores (InvalidInput / NotFound / resto)
# ---------------------------------------------------------------------------
async def invalid_input_handler(request: Request, exc: InvalidInput):
    log.warning("invalid input path=%s err=%s", request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": str(exc)})

async def not_found_handler(request: Request, exc: NotFound):
    log.info("not found path=%s err=%s", request.url.path, exc)
    return JSONResponse(status_code=404, content={"detail": "Result file not found."})

async def failure_handler(request: Request, exc: Exception):
    # el detalle sólo va al log
    log.error("processing failure path=%s err=%s", request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": GENERIC_ERROR})

# ---------------------------------------------------------------------------
# App
# ---------------------------------------------------------------------------
def create_app(storage: Optional[ResultStorage] = None) -> FastAPI:
    app = FastAPI(title="WordCounter")
    app.state.storage = storage if storage is not None else build_storage(settings)

    app.add_exception_handler(InvalidInput, invalid_input_handler)
    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(ProcessingFailure, failure_handler)
    app.add_exception_handler(Exception, failure_handler)

    @app.get("/health", response_model=Health)
    def health(storage: ResultStorage = Depends(get_storage)):
        log.debug("health check")
        return Health(ok=True, storage=storage.backend)

    @app.post("/wordcounter/countwords")
    async def count_words(file: Optional[UploadFile] = File(None),
                          storage: ResultStorage = Depends(get_storage)):
        if file is None:
            raise InvalidInput("File is empty.")
        try:
            data = await file.read()
        except OSError as e:
            raise ProcessingFailure(f"could not read upload file={file.filename}: {e}") from e
        locator = await count_upload(
            file.filename, file.content_type, data, storage,
            line_terminator=settings.line_terminator,
            sort=settings.SORT_RESULTS,
        )
        log.info("count done file=%s locator=%s", file.filename, locator)
        return locator

    @app.get(RESULT_ROUTE + "/{file_name}")
    async def get_count_result(file_name: str, storage: ResultStorage = Depends(get_storage)):
        content = await fetch_result(file_name, storage)
        return Response(
            content=content,
            media_type="text/plain",
            headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
        )

    return app

app = create_app()

if __name__ == "__main__":
    uvicorn.run(app, host=settings.REST_HOST, port=settings.REST_PORT)
