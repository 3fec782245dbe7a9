import base64

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse

from huff.container import compress


def upload(name, data):
    return {"file": SimpleUploadedFile(name, data, content_type="application/octet-stream")}


# ---------------------- Compression ----------------------

def test_compress_returns_attachment(client):
    data = b"Hello, World! " * 20
    response = client.post(reverse("huff:compress"), upload("test.txt", data))

    assert response.status_code == 200
    assert response["Content-Type"] == "application/octet-stream"
    assert "test.txt.huff" in response["Content-Disposition"]
    assert response.content.startswith(b"HUFF")
    assert response.content == compress(data)
    assert response["X-Operation-Id"]
    assert response["X-Original-Size"] == str(len(data))
    assert response["X-Compressed-Size"] == str(len(response.content))
    assert response["X-Compression-Ratio"].endswith("%")
    assert int(response["X-Processing-Time"]) >= 0


def test_compress_without_file(client):
    response = client.post(reverse("huff:compress"))
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": "No file uploaded"}


def test_compress_empty_file(client):
    response = client.post(reverse("huff:compress"), upload("empty.txt", b""))
    assert response.status_code == 400
    assert response.json()["error"] == "No file uploaded"


def test_compress_rejects_oversized_upload(client, settings):
    settings.HUFF_MAX_UPLOAD_SIZE = 10
    response = client.post(reverse("huff:compress"), upload("big.txt", b"x" * 11))
    assert response.status_code == 400
    assert response.json()["error"].startswith("File too large")


def test_compress_requires_post(client):
    assert client.get(reverse("huff:compress")).status_code == 405


def test_compress_json(client):
    data = b"AAAAABBBCC"
    response = client.post(reverse("huff:compress_json"), upload("test.txt", data))
    body = response.json()

    assert response.status_code == 200
    assert body["success"] is True
    assert body["fileName"] == "test.txt.huff"
    assert body["originalSize"] == 10
    assert body["compressedSize"] == len(compress(data))
    assert body["formattedOriginalSize"] == "10 B"
    assert base64.b64decode(body["data"]) == compress(data)


# ---------------------- Decompression ----------------------

def test_decompress_returns_original(client):
    data = "Décompression test ✓".encode("utf-8")
    blob = compress(data)
    response = client.post(reverse("huff:decompress"), upload("notes.txt.huff", blob))

    assert response.status_code == 200
    assert response.content == data
    assert 'filename="notes.txt"' in response["Content-Disposition"]
    assert response["X-Compressed-Size"] == str(len(blob))
    assert response["X-Original-Size"] == str(len(data))


def test_decompress_rejects_foreign_file(client):
    response = client.post(reverse("huff:decompress"), upload("fake.huff", b"not compressed at all"))
    assert response.status_code == 400
    assert "Invalid file format" in response.json()["error"]


def test_decompress_reports_corrupt_payload(client):
    blob = compress(b"This is a test" * 100)[:-3]
    response = client.post(reverse("huff:decompress"), upload("broken.huff", blob))
    assert response.status_code == 422
    assert "Unexpected end of stream" in response.json()["error"]


def test_decompress_json(client):
    data = b"json round trip"
    response = client.post(reverse("huff:decompress_json"), upload("rt.bin.huff", compress(data)))
    body = response.json()

    assert response.status_code == 200
    assert body["success"] is True
    assert body["fileName"] == "rt.bin"
    assert body["originalSize"] == len(data)
    assert base64.b64decode(body["data"]) == data


def test_decompress_json_unsupported_version(client):
    blob = bytearray(compress(b"abc"))
    blob[7] = 9
    response = client.post(reverse("huff:decompress_json"), upload("v9.huff", bytes(blob)))
    body = response.json()
    assert response.status_code == 422
    assert body["success"] is False
    assert "Unsupported file version: 9" in body["errorMessage"]


# ---------------------- Analysis & Validation ----------------------

def test_analyze(client):
    response = client.post(reverse("huff:analyze"), upload("sample.txt", b"AAAAABBBCC"))
    body = response.json()

    assert response.status_code == 200
    assert body["uniqueSymbols"] == 3
    assert body["totalSymbols"] == 10
    assert body["fileName"] == "sample.txt"
    assert body["fileSize"] == 10
    assert body["formattedFileSize"] == "10 B"


@pytest.mark.parametrize(
    "data, valid",
    [
        (compress(b"valid"), True),
        (b"plain text file", False),
    ],
)
def test_validate(client, data, valid):
    response = client.post(reverse("huff:validate"), upload("candidate.huff", data))
    body = response.json()
    assert response.status_code == 200
    assert body["valid"] is valid
    assert body["fileName"] == "candidate.huff"


# ---------------------- Operations ----------------------

def test_progress_of_finished_operation(client):
    operation_id = client.post(
        reverse("huff:compress"), upload("p.txt", b"progress" * 10)
    )["X-Operation-Id"]

    response = client.get(reverse("huff:progress", args=[operation_id]))
    body = response.json()
    assert response.status_code == 200
    assert body["operationId"] == operation_id
    assert body["status"] == "COMPLETED"
    assert body["progressPercent"] == 100
    assert body["complete"] is True


def test_progress_of_unknown_operation(client):
    response = client.get(reverse("huff:progress", args=["does-not-exist"]))
    assert response.status_code == 404
    assert response.json()["success"] is False


def test_cleanup_operation(client):
    operation_id = client.post(
        reverse("huff:compress"), upload("c.txt", b"cleanup")
    )["X-Operation-Id"]

    response = client.delete(reverse("huff:cleanup", args=[operation_id]))
    assert response.status_code == 204
    assert client.get(reverse("huff:progress", args=[operation_id])).status_code == 404


def test_health(client):
    response = client.get(reverse("huff:health"))
    assert response.status_code == 200
    assert response.json()["status"] == "UP"
