"""
Start the video-processing worker.

Consumes the video-processing queue until SIGINT or SIGTERM (Celery warm
shutdown). Any startup failure is logged and the process exits with
status 1.

Usage:
    python -m scripts.start_worker
"""

import logging
import sys

from src.core.worker import start_worker

logger = logging.getLogger(__name__)


def main() -> int:
    worker = start_worker()
    worker.start()
    return worker.exitcode or 0


def cli() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        exitcode = main()
    except KeyboardInterrupt:
        logger.info("Worker interrupted")
        return
    except Exception:
        logger.exception("Worker failed")
        sys.exit(1)

    if exitcode:
        sys.exit(exitcode)


if __name__ == "__main__":
    cli()
