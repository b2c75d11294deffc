import argparse
import logging
import sys

from core.config_loader import load_config
from core.app_context import AppContext
from database.database import configure_database
from database.init_db import init_db

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def cmd_init_db(config, args) -> int:
    seeded = init_db(default_weights=config.matching.default_weights)
    logger.info(f"Database ready ({seeded} parameters seeded)")
    return 0


def cmd_serve(config, args) -> int:
    import uvicorn

    host = args.host or config.web.host
    port = args.port or config.web.port
    logger.info(f"Starting CareMatch API on {host}:{port}")

    uvicorn.run(
        "web.backend.app:app",
        host=host,
        port=port,
        reload=False,
        log_level="info"
    )
    return 0


def cmd_refresh_stale(config, args) -> int:
    ctx = AppContext.build(config)
    limit = args.limit or config.matching.refresh_batch_size

    total = 0
    while True:
        processed = ctx.ranking_service.refresh_stale(limit)
        total += processed
        if processed < limit or not args.all:
            break

    logger.info(f"Refreshed stale matches for {total} children")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="CareMatch enrollment and matching service")
    parser.add_argument('--config', type=str, default='config.yaml',
                        help='Path to config.yaml (default: config.yaml)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    subparsers.add_parser('init-db', help='Create tables and seed default parameters')

    serve = subparsers.add_parser('serve', help='Run the HTTP API')
    serve.add_argument('--host', type=str, default=None)
    serve.add_argument('--port', type=int, default=None)

    refresh = subparsers.add_parser('refresh-stale', help='Recompute stale teacher matches')
    refresh.add_argument('--limit', type=int, default=None,
                         help='Children per batch (default: matching.refresh_batch_size)')
    refresh.add_argument('--all', action='store_true',
                         help='Keep going until no stale matches remain')

    args = parser.parse_args(argv)

    config = load_config(args.config)
    configure_database(config.database.url)

    commands = {
        'init-db': cmd_init_db,
        'serve': cmd_serve,
        'refresh-stale': cmd_refresh_stale,
    }
    return commands[args.command](config, args)


if __name__ == "__main__":
    sys.exit(main())
