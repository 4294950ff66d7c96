from typing import Literal

from pydantic_settings import BaseSettings

LINE_ENDINGS = {"crlf": "\r\n", "lf": "\n"}

class Settings(BaseSettings):
    REST_HOST: str = "0.0.0.0"
    REST_PORT: int = 7002
    PUBLIC_BASE_URL: str = "https://localhost:7002"
    STORAGE_BACKEND: str = "local"   # local | memory | http
    STORAGE_DIR: str = "/data/results"
    STORAGE_URL: str = ""            # base URL del blob store remoto (backend http)
    HTTP_TIMEOUT_S: int = 120
    LINE_ENDING: Literal["crlf", "lf"] = "crlf"
    SORT_RESULTS: bool = False

    @property
    def line_terminator(self) -> str:
        return LINE_ENDINGS[self.LINE_ENDING]

settings = Settings()
