import logging

from receiptsplit.runtime.logging import LOG_FORMAT, LOG_FORMAT_DEBUG, LOG_NAMESPACE, get_logger, set_log_level


def test_get_logger_nests_under_namespace() -> None:
    assert get_logger("receiptsplit.receipt.tokenizer").name == "receiptsplit.receipt.tokenizer"
    assert get_logger("scratch").name == "receiptsplit.scratch"
    assert get_logger(LOG_NAMESPACE).name == LOG_NAMESPACE


def test_set_log_level_switches_format() -> None:
    package_logger = logging.getLogger(LOG_NAMESPACE)
    previous = package_logger.level
    try:
        set_log_level(logging.DEBUG)
        assert package_logger.level == logging.DEBUG
        assert package_logger.handlers[0].formatter._fmt == LOG_FORMAT_DEBUG

        set_log_level(logging.WARNING)
        assert package_logger.handlers[0].formatter._fmt == LOG_FORMAT
    finally:
        set_log_level(previous)
