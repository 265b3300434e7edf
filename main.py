import logging
import os
import sys

from tilegame.game import Game, missing_sheets

logger = logging.getLogger(__name__)


def main():
    level = os.environ.get("TILEGAME_LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    missing = missing_sheets()
    if missing:
        for path in missing:
            logger.error("Sprite sheet not found: %s", path)
        logger.error(
            "Copy the sprite sheets into tilegame/assets/ (see README.md)"
        )
        return 1
    Game().run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
