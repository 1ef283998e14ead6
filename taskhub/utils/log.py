import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(level: str = "INFO", error_log_file: str | None = None):
    """
    Configure the root logger once for the process.
    Errors are additionally appended to `error_log_file` when one is configured.
    """
    root = logging.getLogger()
    if getattr(root, "_taskhub_configured", False):
        return

    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)

    if error_log_file:
        file_handler = logging.FileHandler(error_log_file)
        file_handler.setLevel(logging.ERROR)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(file_handler)

    root._taskhub_configured = True
