import argparse
import logging

from flask import Flask

from genart_server.api.routes import bp as api_bp
from genart_server.config import Settings
from genart_server.kernel.contract import ContractClient
from genart_server.kernel.sketches import SketchWriter
from genart_server.kernel.storage import IpfsStorage
from genart_server.kernel.token_art import ImageCache, TokenArt

log = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def build_token_art(settings: Settings) -> TokenArt:
    return TokenArt(
        contract=ContractClient(settings.rpc_url, settings.contract_address, timeout=settings.request_timeout),
        storage=IpfsStorage(settings.ipfs_api_url, timeout=settings.request_timeout),
        sketches=SketchWriter(settings.pieces_dir),
        cache=ImageCache(),
    )


def create_app(settings: Settings = None, token_art: TokenArt = None) -> Flask:
    settings = settings or Settings.from_env()
    app = Flask(__name__, static_folder=settings.static_dir, static_url_path="")
    app.config["IPFS_GATEWAY"] = settings.ipfs_gateway
    app.extensions["token_art"] = token_art or build_token_art(settings)
    app.register_blueprint(api_bp)

    @app.errorhandler(404)
    def not_found(e):
        return "Not found", 404

    return app


def main(argv=None):
    parser = argparse.ArgumentParser(description="Serve generated art for NFT tokens")
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--host", default="0.0.0.0")
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    if args.port is not None:
        settings.port = args.port
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)

    app = create_app(settings)
    log.info("running at http://%s:%d", args.host, settings.port)
    app.run(host=args.host, port=settings.port, debug=False)


if __name__ == "__main__":
    main()
