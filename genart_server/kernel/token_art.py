import logging
from dataclasses import dataclass
from typing import Dict, Optional

from .renderer import render
from .token_hash import DerivedParameters, hash_digits

log = logging.getLogger(__name__)


class ImageCache:
    """
    Token ID -> resolved image URI.
    Lives as long as the process: no eviction, nothing persisted.
    """
    def __init__(self):
        self._uris: Dict[int, str] = {}

    def get(self, token_id: int) -> Optional[str]:
        return self._uris.get(token_id)

    def put(self, token_id: int, uri: str):
        self._uris[token_id] = uri

    def clear(self):
        self._uris.clear()

    def __contains__(self, token_id) -> bool:
        return token_id in self._uris

    def __len__(self) -> int:
        return len(self._uris)


@dataclass(frozen=True)
class TokenPage:
    token_id: int
    token_hash: str
    script_name: str
    image_uri: str


def image_name(token_id: int) -> str:
    return f"token_{token_id}.png"


class TokenArt:
    def __init__(self, contract, storage, sketches, cache: ImageCache = None, renderer=render):
        self.contract = contract
        self.storage = storage
        self.sketches = sketches
        self.cache = cache if cache is not None else ImageCache()
        self.renderer = renderer

    def token_hash(self, token_id: int) -> str:
        h = self.contract.token_hash(token_id)
        hash_digits(h)
        return h

    def resolve_image(self, token_id: int, token_hash: str = None) -> str:
        # no lock: two concurrent misses render and upload the same bytes twice
        uri = self.cache.get(token_id)
        if uri is not None:
            log.debug("image cache hit for token %s", token_id)
            return uri
        if token_hash is None:
            token_hash = self.token_hash(token_id)
        log.info("rendering token %s", token_id)
        data = self.renderer(token_hash)
        uri = self.storage.upload(data, image_name(token_id))
        self.cache.put(token_id, uri)
        return uri

    def prepare_page(self, token_id: int) -> TokenPage:
        token_hash = self.token_hash(token_id)
        name = self.sketches.write(token_id, token_hash, self.contract.script())
        uri = self.resolve_image(token_id, token_hash)
        return TokenPage(token_id=token_id, token_hash=token_hash, script_name=name, image_uri=uri)

    def metadata(self, token_id: int) -> dict:
        token_hash = self.token_hash(token_id)
        uri = self.resolve_image(token_id, token_hash)
        params = DerivedParameters.from_hash(token_hash)
        r, g, b = params.fill
        return {
            "name": f"Token #{token_id}",
            "image": uri,
            "attributes": [
                {"trait_type": "Hash", "value": token_hash},
                {"trait_type": "Line Thickness", "value": params.line_thickness},
                {"trait_type": "Fill", "value": f"#{r:02x}{g:02x}{b:02x}"},
            ],
        }
