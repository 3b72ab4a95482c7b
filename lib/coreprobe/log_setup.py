"""Manages the setup of logging for the coreprobe command."""

import logging
import sys
from logging import handlers

from coreprobe import output

LOG_FORMAT = "{asctime} {levelname} {name}: {message}"


def setup_loggers(cfg, verbose=False, err_out=sys.stderr):
    """Setup the loggers for the coreprobe command. This will include:

    - A rotating log file, if the config names one.
    - Plugin (yapsy) errors, printed to the terminal in red.
    - Everything at debug level to the terminal, when verbose.

    :param cfg: The coreprobe configuration.
    :param bool verbose: When verbose, setup the package logger to print
        to stderr as well.
    :param IO[str] err_out: Where to log errors meant for the terminal. This
        exists primarily for testing.
    :returns: False if the log file couldn't be opened.
    """

    success = True

    logger = logging.getLogger('coreprobe')
    # The package logger should pass all messages, even if the handlers
    # filter them.
    logger.setLevel(logging.DEBUG)

    if cfg.log_file is not None:
        try:
            cfg.log_file.parent.mkdir(parents=True, exist_ok=True)
            # Rotate at 1 MB.
            file_handler = handlers.RotatingFileHandler(
                filename=cfg.log_file.as_posix(),
                maxBytes=1024 ** 2,
                backupCount=3)
        except OSError as err:
            output.fprint("Could not write to coreprobe log at '{}': {}"
                          .format(cfg.log_file, err),
                          color=output.YELLOW,
                          file=err_out)
            success = False
        else:
            file_handler.setFormatter(logging.Formatter(LOG_FORMAT, style='{'))
            file_handler.setLevel(getattr(logging, cfg.log_level.upper()))
            logger.addHandler(file_handler)

    # Setup the yapsy logger to log to terminal. We need to know immediately
    # when yapsy encounters errors.
    yapsy_logger = logging.getLogger('yapsy')
    yapsy_handler = logging.StreamHandler(stream=err_out)
    # Color all these error messages red.
    yapsy_handler.setFormatter(
        logging.Formatter("\x1b[31m{asctime} {message}\x1b[0m",
                          style='{'))
    yapsy_handler.setLevel(logging.WARNING)
    yapsy_logger.addHandler(yapsy_handler)

    # Everything else at or above the configured level goes to the terminal,
    # or all of it when verbose.
    term_handler = logging.StreamHandler(err_out)
    if verbose:
        term_handler.setLevel(logging.DEBUG)
    else:
        term_handler.setLevel(getattr(logging, cfg.log_level.upper()))
    term_handler.setFormatter(logging.Formatter(LOG_FORMAT, style='{'))
    logger.addHandler(term_handler)

    return success
