import os

import pytest

from posadmin.config import settings
from posadmin.uploads.storage import remove_upload, save_upload

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def test_upload_image(cashier_client):
    resp = cashier_client.post("/api/upload", files={"file": ("Photo.PNG", PNG, "image/png")})
    assert resp.status_code == 201
    url = resp.json()["url"]
    assert url.startswith("/uploads/") and url.endswith(".png")

    served = cashier_client.get(url)
    assert served.status_code == 200
    assert served.content == PNG


def test_extension_follows_content_type_not_filename(cashier_client):
    resp = cashier_client.post("/api/upload", files={"file": ("x.html", b"<script>alert(1)</script>", "image/png")})
    assert resp.status_code == 201
    url = resp.json()["url"]
    assert url.endswith(".png")
    assert ".html" not in url

    served = cashier_client.get(url)
    assert served.headers["content-type"] == "image/png"


@pytest.mark.parametrize("filename,content_type,ext", [
    ("photo.jpeg", "image/jpeg", ".jpg"),
    ("anim", "image/gif", ".gif"),
    ("pic.PNG.exe", "image/webp", ".webp"),
])
def test_extension_map(cashier_client, filename, content_type, ext):
    resp = cashier_client.post("/api/upload", files={"file": (filename, PNG, content_type)})
    assert resp.json()["url"].endswith(ext)


@pytest.mark.parametrize("content_type", ["text/plain", "application/pdf", "image/svg+xml"])
def test_rejects_non_images(cashier_client, content_type):
    resp = cashier_client.post("/api/upload", files={"file": ("x.bin", b"data", content_type)})
    assert resp.status_code == 400
    assert "Unsupported file type" in resp.json()["error"]


def test_rejects_oversized(cashier_client, monkeypatch):
    monkeypatch.setattr(settings, "upload_max_bytes", 1024 * 1024)
    resp = cashier_client.post("/api/upload", files={"file": ("big.jpg", b"\xff" * (1024 * 1024 + 1), "image/jpeg")})
    assert resp.status_code == 400
    assert resp.json()["error"] == "File too large. Maximum is 1MB"


def test_requires_a_file(cashier_client):
    resp = cashier_client.post("/api/upload", data={"note": "nothing attached"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "No file received"


def test_requires_session(client):
    resp = client.post("/api/upload", files={"file": ("a.png", PNG, "image/png")})
    assert resp.status_code == 307
    assert resp.headers["location"] == "/login"


def test_remove_upload_only_touches_upload_dir():
    url = save_upload(b"abc", ".gif")
    path = os.path.join(settings.upload_dir, url.rsplit("/", 1)[-1])
    assert os.path.exists(path)
    assert remove_upload(url) is True
    assert not os.path.exists(path)
    assert remove_upload(url) is False
    assert remove_upload("https://cdn.example.org/a.gif") is False
