"""Command line entry point: run the wiki under uvicorn."""

import argparse
import logging
from pathlib import Path

import uvicorn

from plainwiki.config import settings
from plainwiki.main import create_app

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """
    Parse the arguments. Defaults come from the PLAINWIKI_* settings.
    """
    parser = argparse.ArgumentParser(description="Serve a plain-text wiki.")
    parser.add_argument(
        "--data-dir", type=Path, default=settings.data_dir, help="Directory holding the pages"
    )
    parser.add_argument(
        "--host", default=settings.host, help=f"Host to bind to (default: {settings.host})"
    )
    parser.add_argument(
        "--port", type=int, default=settings.port, help=f"Port to bind to (default: {settings.port})"
    )
    return parser.parse_args(argv)


def main(argv=None):
    opts = parse_args(argv)
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=settings.log_level.upper(),
    )

    app = create_app(settings.model_copy(update={"data_dir": opts.data_dir}))
    logger.info("Server started on http://%s:%d", opts.host, opts.port)
    uvicorn.run(
        app, host=opts.host, port=opts.port, log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    main()
