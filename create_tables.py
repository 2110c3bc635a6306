from core.config import settings
from core.init_db import init_db
from core.logging_config import setup_logging


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    init_db()
