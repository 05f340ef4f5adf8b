import os
from dataclasses import dataclass

from dotenv import load_dotenv

PACKAGE_DIR = os.path.abspath(os.path.dirname(__file__))
DEFAULT_STATIC_DIR = os.path.join(PACKAGE_DIR, "public")


@dataclass
class Settings:
    port: int = 8000
    rpc_url: str = ""
    contract_address: str = ""
    ipfs_api_url: str = "http://127.0.0.1:5001"
    ipfs_gateway: str = "https://ipfs.io/ipfs/"
    static_dir: str = DEFAULT_STATIC_DIR
    request_timeout: float = 10.0
    log_level: str = "INFO"

    @property
    def pieces_dir(self) -> str:
        return os.path.join(self.static_dir, "token", "js", "pieces")

    @staticmethod
    def from_env(env=None) -> "Settings":
        if env is None:
            load_dotenv()
            env = os.environ
        return Settings(
            port=int(env.get("PORT", 8000)),
            rpc_url=env.get("RPC_URL", ""),
            contract_address=env.get("CONTRACT_ADDRESS", ""),
            ipfs_api_url=env.get("IPFS_API_URL", "http://127.0.0.1:5001"),
            ipfs_gateway=env.get("IPFS_GATEWAY", "https://ipfs.io/ipfs/"),
            static_dir=env.get("STATIC_DIR", DEFAULT_STATIC_DIR),
            request_timeout=float(env.get("REQUEST_TIMEOUT", 10.0)),
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )
