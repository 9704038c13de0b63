import logging

_logger = logging.getLogger('lenient_json')

def setLogLevel(level: int | str):
    """
    Sets the level of the package logger. Output goes to stderr unless the
    root logger is already configured.
    """
    logging.basicConfig(format='[%(levelname)s] %(message)s')
    if isinstance(level, str):
        level = level.upper()
    _logger.setLevel(level)

def debug(msg: str):
    _logger.debug(msg)

def info(msg: str):
    _logger.info(msg)
