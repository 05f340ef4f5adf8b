import itertools
import logging

import requests

from .abi import (
    SCRIPT_SELECTOR,
    TOKEN_TO_HASH_SELECTOR,
    AbiDecodeError,
    decode_bytes32,
    decode_string,
    encode_call,
)

log = logging.getLogger(__name__)


class ContractError(RuntimeError):
    pass


class ContractClient:
    """
    Read-only access to the art contract over JSON-RPC eth_call:
    - script(): generator script shared by every token
    - token_hash(token_id): bytes32 hash minted for one token
    """
    def __init__(self, rpc_url: str, address: str, timeout: float = 10.0, session=None):
        if not rpc_url:
            raise ContractError("RPC_URL is not configured")
        if not address:
            raise ContractError("CONTRACT_ADDRESS is not configured")
        self.rpc_url = rpc_url
        self.address = address
        self.timeout = timeout
        self.session = session or requests.Session()
        self._ids = itertools.count(1)

    def eth_call(self, data: str) -> str:
        payload = {
            "jsonrpc": "2.0",
            "method": "eth_call",
            "params": [{"to": self.address, "data": data}, "latest"],
            "id": next(self._ids),
        }
        try:
            resp = self.session.post(self.rpc_url, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            body = resp.json()
        except (requests.RequestException, ValueError) as e:
            log.warning("eth_call to %s failed: %s", self.rpc_url, e)
            raise ContractError(f"RPC request failed: {e}") from e
        if "error" in body:
            raise ContractError(f"RPC error: {body['error']}")
        if "result" not in body:
            raise ContractError("RPC response has no result")
        return body["result"]

    def script(self) -> str:
        try:
            return decode_string(self.eth_call(encode_call(SCRIPT_SELECTOR)))
        except AbiDecodeError as e:
            raise ContractError(f"bad script() result: {e}") from e

    def token_hash(self, token_id: int) -> str:
        try:
            return decode_bytes32(self.eth_call(encode_call(TOKEN_TO_HASH_SELECTOR, token_id)))
        except AbiDecodeError as e:
            raise ContractError(f"bad tokenToHash({token_id}) result: {e}") from e


class MemoryContract:
    def __init__(self, script: str = "", hashes=None):
        self._script = script
        self.hashes = dict(hashes or {})
        self.calls = []

    def script(self) -> str:
        self.calls.append(("script",))
        return self._script

    def token_hash(self, token_id: int) -> str:
        self.calls.append(("tokenToHash", token_id))
        if token_id not in self.hashes:
            raise ContractError(f"token {token_id} has no hash")
        return self.hashes[token_id]
