import logging
import os

FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

def configure_logging(log_dir: str = "logs", level: str = "INFO"):
    logger = logging.getLogger()
    if logger.hasHandlers():
        return
    lvl = logging.getLevelName(level.upper())
    if not isinstance(lvl, int):
        lvl = logging.INFO
    logger.setLevel(lvl)

    fmt = logging.Formatter(FORMAT)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        fh = logging.FileHandler(os.path.join(log_dir, "app.log"))
        fh.setFormatter(fmt)
        fh.setLevel(lvl)
        logger.addHandler(fh)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    ch.setLevel(lvl)
    logger.addHandler(ch)
