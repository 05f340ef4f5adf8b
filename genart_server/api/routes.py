import logging

from flask import Blueprint, abort, current_app, jsonify, redirect, render_template, url_for

from genart_server.kernel.abi import UINT256_LIMIT
from genart_server.kernel.contract import ContractError
from genart_server.kernel.sketches import SCRIPT_URL_PREFIX
from genart_server.kernel.storage import StorageError, gateway_url
from genart_server.kernel.token_hash import InvalidHashError

log = logging.getLogger(__name__)

bp = Blueprint("api", __name__, url_prefix="/")


def token_art():
    return current_app.extensions["token_art"]


def parse_token_id(raw: str) -> int:
    # 78 digits covers every uint256; longer strings are rejected before int()
    if not (raw.isascii() and raw.isdigit()) or len(raw) > 78:
        abort(400, description=f"bad token id {raw!r}")
    token_id = int(raw)
    if token_id >= UINT256_LIMIT:
        abort(400, description="token id does not fit in uint256")
    return token_id


@bp.errorhandler(400)
def bad_request(e):
    return jsonify({"error": e.description}), 400


@bp.errorhandler(ContractError)
@bp.errorhandler(StorageError)
@bp.errorhandler(InvalidHashError)
def upstream_failed(e):
    log.error("upstream failure: %s", e)
    return jsonify({"error": str(e)}), 502


# ---------- health / version ----------
@bp.route("/health")
def health():
    return jsonify({"ok": True})


@bp.route("/version")
def version():
    return jsonify({"name": "genart-server", "api": 1})


# ---------- token page ----------
@bp.route("/token/<token_id>")
def token_page(token_id):
    page = token_art().prepare_page(parse_token_id(token_id))
    return render_template(
        "piece.html",
        token_id=page.token_id,
        script_src=SCRIPT_URL_PREFIX + page.script_name,
        image_url=gateway_url(page.image_uri, current_app.config["IPFS_GATEWAY"]),
    )


# ---------- metadata ----------
@bp.route("/metadata/<token_id>")
def metadata(token_id):
    tid = parse_token_id(token_id)
    meta = token_art().metadata(tid)
    meta["animation_url"] = url_for("api.token_page", token_id=tid, _external=True)
    return jsonify(meta)


@bp.route("/image/<token_id>")
def image(token_id):
    uri = token_art().resolve_image(parse_token_id(token_id))
    return redirect(gateway_url(uri, current_app.config["IPFS_GATEWAY"]))
