import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for command-line use.

    The library itself never installs handlers; only entry points call this.

    Args:
        verbose: Show cpgen debug records (rejected candidates, seeding)
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    # Keep third-party packages (qiskit in particular) quiet
    root_logger.setLevel(logging.WARNING)

    cpgen_logger = logging.getLogger("cpgen")
    cpgen_logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    stderr_handler = logging.StreamHandler()
    stderr_handler.setLevel(logging.DEBUG)
    stderr_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(stderr_handler)
