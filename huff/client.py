"""HTTP client for the compression API, mirroring the web front end's calls."""

import logging

import requests
from decouple import config

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30

ENDPOINTS = {
    "compress": "/huffman/compress",
    "compress_json": "/huffman/compress/json",
    "decompress": "/huffman/decompress",
    "decompress_json": "/huffman/decompress/json",
    "analyze": "/huffman/analyze",
    "validate": "/huffman/validate",
    "progress": "/huffman/progress/{operation_id}",
    "health": "/huffman/health",
}


def error_message(exc, default):
    response = getattr(exc, "response", None)
    if response is not None:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            return body["error"]
        return f"HTTP Error {response.status_code}: {response.reason}"
    return str(exc) or default


class HuffmanApiClient:
    def __init__(self, base_url=None, timeout=DEFAULT_TIMEOUT, session=None):
        if base_url is None:
            base_url = config("HUFF_API_URL", default="http://localhost:8000")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def url(self, name, **params):
        return self.base_url + ENDPOINTS[name].format(**params)

    def upload(self, name, data, file_name):
        response = self.session.post(
            self.url(name),
            files={"file": (file_name, data, "application/octet-stream")},
            timeout=self.timeout,
        )
        response.raise_for_status()
        return response

    def _json_call(self, name, data, file_name, default_error):
        try:
            return self.upload(name, data, file_name).json()
        except requests.RequestException as exc:
            logger.warning("%s request failed: %s", name, exc)
            return {"success": False, "error": error_message(exc, default_error)}

    def _binary_call(self, name, data, file_name):
        try:
            return self.upload(name, data, file_name).content
        except requests.RequestException as exc:
            logger.warning("%s request failed: %s", name, exc)
            return None

    # ---------------------- Compression ----------------------

    def compress(self, data, file_name="file"):
        return self._json_call("compress_json", data, file_name, "Compression failed")

    def compress_binary(self, data, file_name="file"):
        return self._binary_call("compress", data, file_name)

    def decompress(self, data, file_name="file.huff"):
        return self._json_call("decompress_json", data, file_name, "Decompression failed")

    def decompress_binary(self, data, file_name="file.huff"):
        return self._binary_call("decompress", data, file_name)

    # ---------------------- Analysis & Status ----------------------

    def analyze(self, data, file_name="file"):
        return self._json_call("analyze", data, file_name, "Analysis failed")

    def validate(self, data, file_name="file.huff"):
        try:
            return self.upload("validate", data, file_name).json()
        except requests.RequestException as exc:
            return {"valid": False, "message": error_message(exc, "Validation failed")}

    def progress(self, operation_id):
        try:
            response = self.session.get(
                self.url("progress", operation_id=operation_id), timeout=self.timeout
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as exc:
            return {"success": False, "error": error_message(exc, "Progress lookup failed")}

    def health(self):
        try:
            response = self.session.get(self.url("health"), timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except requests.RequestException:
            return {"status": "DOWN"}
