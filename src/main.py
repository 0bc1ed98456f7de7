import argparse
import logging

import uvicorn

from .config import get_settings
from .recipes import load_recipes


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def list_recipes(settings) -> None:
    recipes = load_recipes(settings.ASSETS_DIR, settings.RECIPES_FILE)
    print(f"Loaded {len(recipes)} recipe(s).")
    for r in recipes.values():
        print(f"- {r.id}: {r.emoji} {r.name}")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Recipe site CTF server")
    parser.add_argument("--host", help="bind address")
    parser.add_argument("--port", type=int, help="listen port")
    parser.add_argument(
        "--list-recipes", action="store_true", help="print the catalogue and exit"
    )
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    if args.list_recipes:
        list_recipes(settings)
        return

    host = args.host or settings.HOST
    port = args.port or settings.PORT
    logging.getLogger(__name__).info("Server starting on http://%s:%d", host, port)
    uvicorn.run(
        "src.app:app",
        host=host,
        port=port,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
