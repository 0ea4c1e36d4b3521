import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(verbosity: int = 0) -> logging.Logger:
    """
    Logs go to stderr so stdout only carries scan results.
    verbosity: 0 -> WARNING, 1 -> INFO, 2+ -> DEBUG
    """
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logger = logging.getLogger("portprobe")
    logger.setLevel(level)

    # Prevent duplicate handlers if main() runs more than once
    if logger.handlers:
        return logger

    sh = logging.StreamHandler()
    sh.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(sh)
    return logger
