import logging

from playlist_builder.core import configure_logging, get_logger


def test_configure_logging_targets_the_project_logger() -> None:
    root_handlers = list(logging.getLogger().handlers)

    project = configure_logging(logging.DEBUG)
    configure_logging(logging.WARNING)

    assert project.name == "playlist_builder"
    assert project.level == logging.WARNING
    assert project.propagate is False
    named = [h for h in project.handlers if h.get_name() == "playlist_builder.stdout"]
    assert len(named) == 1
    assert logging.getLogger().handlers == root_handlers


def test_module_loggers_inherit_the_project_handler() -> None:
    configure_logging(logging.INFO)

    logger = get_logger("playlist_builder.spotify.pagination")

    assert logger.getEffectiveLevel() == logging.INFO
    assert logger.parent.name.startswith("playlist_builder")
