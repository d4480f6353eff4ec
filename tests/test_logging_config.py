import logging

import pytest

from geocanvas.logging_config import LOGGER_NAMESPACE, resolve_level, setup_logging
from geocanvas.main import build_arg_parser


@pytest.fixture
def package_logger():
    logger = logging.getLogger(LOGGER_NAMESPACE)
    yield logger
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.mark.parametrize('argv, expected', [([], logging.INFO), (['--debug'], logging.DEBUG)])
def test_debug_flag_selects_level(argv, expected):
    args = build_arg_parser().parse_args(argv)

    assert resolve_level(args.debug) == expected


def test_setup_logging_writes_to_log_file(package_logger, tmp_path):
    log_file = tmp_path / 'geocanvas.log'

    setup_logging(level=logging.DEBUG, log_file=str(log_file))
    logging.getLogger('geocanvas.model.state').debug('Added point P1.')
    for handler in package_logger.handlers:
        handler.flush()

    text = log_file.read_text(encoding='utf-8')
    assert 'Logging initialized (level DEBUG).' in text
    assert 'geocanvas.model.state - DEBUG - Added point P1.' in text


def test_setup_logging_does_not_stack_handlers(package_logger):
    setup_logging()
    setup_logging()

    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.INFO
