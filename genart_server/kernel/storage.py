import hashlib
import logging

import requests

log = logging.getLogger(__name__)

IPFS_SCHEME = "ipfs://"


class StorageError(RuntimeError):
    pass


def gateway_url(uri: str, gateway: str) -> str:
    if not uri.startswith(IPFS_SCHEME):
        return uri
    return gateway.rstrip("/") + "/" + uri[len(IPFS_SCHEME):]


class IpfsStorage:
    """Uploads through an IPFS node's HTTP API (/api/v0/add)."""

    def __init__(self, api_url: str, timeout: float = 30.0, session=None):
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def upload(self, data: bytes, filename: str = "image.png") -> str:
        try:
            resp = self.session.post(
                f"{self.api_url}/api/v0/add",
                params={"pin": "true", "cid-version": "1"},
                files={"file": (filename, data, "image/png")},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            cid = resp.json()["Hash"]
        except (requests.RequestException, ValueError, KeyError) as e:
            log.warning("upload of %s failed: %s", filename, e)
            raise StorageError(f"IPFS upload failed: {e}") from e
        log.info("uploaded %s (%d bytes) -> %s", filename, len(data), cid)
        return IPFS_SCHEME + cid


class MemoryStorage:
    def __init__(self):
        self.blobs = {}
        self.uploads = 0

    def upload(self, data: bytes, filename: str = "image.png") -> str:
        if not isinstance(data, (bytes, bytearray)):
            raise StorageError("upload expects bytes")
        cid = hashlib.sha256(bytes(data)).hexdigest()
        self.blobs[cid] = bytes(data)
        self.uploads += 1
        return IPFS_SCHEME + cid

    def get(self, uri: str) -> bytes:
        cid = uri[len(IPFS_SCHEME):] if uri.startswith(IPFS_SCHEME) else uri
        if cid not in self.blobs:
            raise StorageError(f"unknown uri {uri}")
        return self.blobs[cid]
