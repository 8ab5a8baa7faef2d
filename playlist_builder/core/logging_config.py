import logging
import sys

from .logging_utils import LOGGER_NAME

_HANDLER_NAME = "playlist_builder.stdout"


def configure_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Attach a stdout handler to the "playlist_builder" logger tree.

    The root logger is left alone so that uvicorn or pytest keep their own
    setup; project records do not propagate to it to avoid printing twice.
    Calling this again only changes the level.
    """
    project_logger = logging.getLogger(LOGGER_NAME)
    project_logger.setLevel(level)

    if any(h.get_name() == _HANDLER_NAME for h in project_logger.handlers):
        return project_logger

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%H:%M:%S",
        )
    )

    project_logger.addHandler(handler)
    project_logger.propagate = False
    return project_logger
