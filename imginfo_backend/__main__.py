"""Run the analyzer HTTP server: python -m imginfo_backend"""
from aiohttp import web

from imginfo_backend.config import load_settings
from imginfo_backend.routes import create_app


def main() -> None:
    settings = load_settings()
    web.run_app(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
