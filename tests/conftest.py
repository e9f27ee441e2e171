import io

import httpx
import pytest
from PIL import Image

from clonesome.config import ProviderConfig

from fakes import BASE_URL


@pytest.fixture
def provider_config():
    return ProviderConfig(
        api_token="test-token",
        base_url=BASE_URL,
        poll_interval=0,
        max_poll_attempts=5,
    )


def _png_bytes():
    buf = io.BytesIO()
    Image.new("RGB", (4, 3), "red").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture
def image_host(monkeypatch):
    """Serve /ok.png as a small PNG and everything else as 404."""
    real_client = httpx.AsyncClient
    png = _png_bytes()

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/ok.png":
            return httpx.Response(200, content=png, headers={"Content-Type": "image/png"})
        return httpx.Response(404, text="not found")

    def _client(*args, **kwargs):
        return real_client(transport=httpx.MockTransport(handler))

    monkeypatch.setattr(httpx, "AsyncClient", _client)
