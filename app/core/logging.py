import logging
import os
from typing import Optional

def configure_logging(level: str = "INFO", log_file: Optional[str] = None):
    logger = logging.getLogger()
    if logger.hasHandlers():
        return
    logger.setLevel(level.upper())

    fmt = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")

    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        fh = logging.FileHandler(log_file)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    logger.addHandler(ch)

    # multipart parser is chatty at DEBUG
    logging.getLogger("multipart").setLevel(logging.WARNING)
