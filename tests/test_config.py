import os

from genart_server.config import DEFAULT_STATIC_DIR, Settings
from genart_server.kernel.contract import ContractClient
from genart_server.kernel.storage import IpfsStorage
from genart_server.server import build_token_art


def test_defaults():
    s = Settings.from_env({})
    assert s.port == 8000
    assert s.static_dir == DEFAULT_STATIC_DIR
    assert s.pieces_dir == os.path.join(DEFAULT_STATIC_DIR, "token", "js", "pieces")
    assert s.log_level == "INFO"


def test_from_env():
    s = Settings.from_env({
        "PORT": "9001",
        "RPC_URL": "http://rpc.local",
        "CONTRACT_ADDRESS": "0xC0FFEE",
        "IPFS_API_URL": "http://ipfs.local:5001",
        "REQUEST_TIMEOUT": "2.5",
        "LOG_LEVEL": "debug",
    })
    assert s.port == 9001
    assert s.rpc_url == "http://rpc.local"
    assert s.contract_address == "0xC0FFEE"
    assert s.request_timeout == 2.5
    assert s.log_level == "DEBUG"


def test_build_token_art(tmp_path):
    s = Settings(rpc_url="http://rpc.local", contract_address="0xC0FFEE",
                 ipfs_api_url="http://ipfs.local:5001/", static_dir=str(tmp_path))
    art = build_token_art(s)
    assert isinstance(art.contract, ContractClient)
    assert isinstance(art.storage, IpfsStorage)
    assert art.storage.api_url == "http://ipfs.local:5001"
    assert art.sketches.directory == s.pieces_dir
    assert len(art.cache) == 0
