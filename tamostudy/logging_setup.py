import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_DIR = Path.home() / ".tamostudy" / "logs"
LOG_FILE = LOG_DIR / "tamostudy.log"


def setup_logging(level: int = logging.INFO, log_file: Path | None = None) -> logging.Logger:
    log_file = log_file or LOG_FILE
    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger = logging.getLogger("tamostudy")
    logger.setLevel(level)

    if not logger.handlers:
        handler = RotatingFileHandler(
            log_file,
            maxBytes=1_000_000,
            backupCount=3,
            encoding="utf-8",
        )
        fmt = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
        handler.setFormatter(fmt)
        logger.addHandler(handler)

        console = logging.StreamHandler()
        console.setFormatter(logging.Formatter("[TAMOSTUDY] %(message)s"))
        logger.addHandler(console)

    return logger
