import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def configure_logging(level: int = logging.WARNING) -> None:
    """Attach a single stderr handler to the ``clawcode`` logger.

    Safe to call more than once; later calls only change the level.
    """
    logger = logging.getLogger("clawcode")
    logger.setLevel(level)

    if getattr(logger, "_clawcode_configured", False):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    logger.addHandler(handler)
    logger.propagate = False
    setattr(logger, "_clawcode_configured", True)
