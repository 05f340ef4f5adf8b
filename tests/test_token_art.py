import pytest

from genart_server.kernel.contract import ContractError, MemoryContract
from genart_server.kernel.renderer import render
from genart_server.kernel.sketches import SketchWriter
from genart_server.kernel.storage import MemoryStorage
from genart_server.kernel.token_art import ImageCache, TokenArt
from genart_server.kernel.token_hash import InvalidHashError

HASHES = {1: "0x" + "1f" * 32, 2: "0x" + "2e" * 32, 3: "0x1234"}


class CountingRenderer:
    def __init__(self, inner=None):
        self.inner = inner
        self.calls = []

    def __call__(self, token_hash):
        self.calls.append(token_hash)
        if self.inner:
            return self.inner(token_hash)
        return ("png:" + token_hash).encode()


@pytest.fixture
def art(tmp_path):
    return TokenArt(
        contract=MemoryContract("function setup() {}", HASHES),
        storage=MemoryStorage(),
        sketches=SketchWriter(str(tmp_path)),
        cache=ImageCache(),
        renderer=CountingRenderer(),
    )


def test_cache_basics():
    cache = ImageCache()
    assert cache.get(1) is None
    cache.put(1, "ipfs://a")
    assert 1 in cache and len(cache) == 1
    assert cache.get(1) == "ipfs://a"
    cache.clear()
    assert len(cache) == 0


def test_second_request_served_from_cache(art):
    first = art.resolve_image(1)
    second = art.resolve_image(1)
    assert first == second
    assert len(art.renderer.calls) == 1
    assert art.storage.uploads == 1
    assert art.cache.get(1) == first


def test_distinct_tokens_rendered_separately(art):
    assert art.resolve_image(1) != art.resolve_image(2)
    assert art.renderer.calls == [HASHES[1], HASHES[2]]


def test_real_render_is_idempotent_across_caches(tmp_path):
    def fresh():
        return TokenArt(
            MemoryContract("", HASHES), MemoryStorage(), SketchWriter(str(tmp_path)), ImageCache(),
            renderer=CountingRenderer(render),
        )
    assert fresh().resolve_image(1) == fresh().resolve_image(1)


def test_prepare_page_writes_script(art, tmp_path):
    page = art.prepare_page(2)
    assert page.token_id == 2
    assert page.token_hash == HASHES[2]
    assert page.script_name == "token_2.js"
    assert page.image_uri == art.cache.get(2)
    assert (tmp_path / "token_2.js").read_text(encoding="utf-8").endswith("function setup() {}")


def test_repeated_pages_render_once(art):
    a = art.prepare_page(1)
    b = art.prepare_page(1)
    assert a == b
    assert len(art.renderer.calls) == 1
    assert art.storage.uploads == 1


def test_metadata(art):
    meta = art.metadata(1)
    assert meta["name"] == "Token #1"
    assert meta["image"] == art.cache.get(1)
    traits = {a["trait_type"]: a["value"] for a in meta["attributes"]}
    assert traits["Hash"] == HASHES[1]
    assert traits["Line Thickness"] == 0x1f
    assert traits["Fill"] == "#1f1f1f"


def test_unknown_token_propagates(art):
    with pytest.raises(ContractError):
        art.resolve_image(99)
    assert len(art.cache) == 0


def test_malformed_chain_hash_rejected(art):
    with pytest.raises(InvalidHashError):
        art.prepare_page(3)
    assert art.renderer.calls == []
    assert art.storage.uploads == 0
