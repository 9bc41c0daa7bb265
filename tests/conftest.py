from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable

import pytest
from starlette.requests import Request

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SRC_PATH = PROJECT_ROOT / "src"
if SRC_PATH.exists() and str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from http_problem_mapper.options import HttpExceptionsOptions  # noqa: E402


HELP_PAGE = "http://www.example.com/help-page"


def _build_request(path: str = "", method: str = "GET") -> Request:
    scope = {
        "type": "http",
        "method": method,
        "scheme": "http",
        "server": ("testserver", 80),
        "path": path,
        "root_path": "",
        "query_string": b"",
        "headers": [],
    }
    return Request(scope)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def make_request() -> Callable[..., Request]:
    return _build_request


@pytest.fixture
def context() -> Request:
    return _build_request()


@pytest.fixture
def options() -> HttpExceptionsOptions:
    return HttpExceptionsOptions(default_help_link=HELP_PAGE)
