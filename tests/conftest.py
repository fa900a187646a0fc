import io
from typing import Dict, Union
from unittest.mock import MagicMock

import pytest
import requests
from PIL import Image


def _encode(fmt: str, mode: str = "RGB") -> bytes:
    buffer = io.BytesIO()
    Image.new(mode, (8, 6), color=(200, 30, 30) if mode == "RGB" else 1).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return _encode("PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    return _encode("JPEG")


@pytest.fixture
def gif_bytes() -> bytes:
    return _encode("GIF", mode="P")


@pytest.fixture
def bmp_bytes() -> bytes:
    return _encode("BMP")


def fake_response(status: int = 200, content: bytes = b"", reason: str = "OK") -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.reason = reason
    response.content = content
    return response


Reply = Union[MagicMock, Exception]


@pytest.fixture
def make_session():
    """Build a mock ``requests.Session`` whose ``get`` answers from a URL map."""

    def _make(replies: Dict[str, Reply]) -> MagicMock:
        session = MagicMock(spec=requests.Session)

        def _get(url, timeout=None):
            reply = replies[url]
            if isinstance(reply, Exception):
                raise reply
            return reply

        session.get.side_effect = _get
        return session

    return _make


@pytest.fixture
def http_response():
    return fake_response
