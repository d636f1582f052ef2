import logging

import config
from app import run_app


def main() -> None:
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT)
    run_app()


if __name__ == "__main__":
    main()
