import logging
import os

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logger(name, log_dir=None, log_filename="pathwatcher.log", level=logging.INFO, console=True):
    """
    Set up and return a logger with file and (optionally) console handlers.

    Args:
        name (str): The logger name.
        log_dir (str, optional): Directory where the log file will be stored.
            No file handler is added when omitted.
        log_filename (str): Log file name.
        level (int or str): Logging level, e.g. logging.DEBUG or "DEBUG".
        console (bool): Whether to add a console handler.

    Returns:
        logging.Logger: The configured logger.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear out any existing handlers.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(os.path.join(log_dir, log_filename))
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def setup_from_config(cfg, name="pathwatcher"):
    """
    Configure the package logger from the ``[logging]`` table of a loaded config.

    Returns:
        logging.Logger: The configured logger.
    """
    log_cfg = cfg.get("logging", {})
    return setup_logger(
        name,
        log_dir=log_cfg.get("log_dir"),
        log_filename=log_cfg.get("log_file", "pathwatcher.log"),
        level=log_cfg.get("level", "INFO"),
        console=log_cfg.get("console", True),
    )
