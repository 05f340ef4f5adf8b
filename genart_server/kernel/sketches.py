import os

SCRIPT_URL_PREFIX = "/token/js/pieces/"


def script_name(token_id: int) -> str:
    return f"token_{token_id}.js"


def token_data_preamble(token_hash: str, token_id: int) -> str:
    return f'const tokenData = {{\n    hash: "{token_hash}",\n    tokenId: {token_id}\n}}\n\n'


class SketchWriter:
    """Writes the per-token script the token page loads: token data first, then the contract script."""

    def __init__(self, directory: str):
        self.directory = directory

    def path_for(self, token_id: int) -> str:
        return os.path.join(self.directory, script_name(token_id))

    def write(self, token_id: int, token_hash: str, script: str) -> str:
        os.makedirs(self.directory, exist_ok=True)
        with open(self.path_for(token_id), "w", encoding="utf-8") as f:
            f.write(token_data_preamble(token_hash, token_id) + script)
        return script_name(token_id)
