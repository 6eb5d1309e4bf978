import logging

import colorama
from colorama import Fore, Style

colorama.init(autoreset=True)


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": Fore.CYAN,
        "INFO": Fore.GREEN,
        "WARNING": Fore.YELLOW,
        "ERROR": Fore.RED,
        "CRITICAL": Fore.WHITE + Style.BRIGHT + Fore.RED,
    }

    def format(self, record: logging.LogRecord):
        # copy so other handlers still see the plain level name
        record = logging.makeLogRecord(record.__dict__)
        levelname = record.levelname
        color = self.COLORS.get(levelname, Fore.WHITE)
        pad = " " * (8 - len(levelname))
        record.levelname = f"[{color}{levelname}{Style.RESET_ALL}]{pad}"
        return super().format(record)


logger = logging.getLogger("sentiero")
logger.setLevel(logging.INFO)

console_handler = logging.StreamHandler()
console_handler.setLevel(logging.DEBUG)

formatter = ColoredFormatter("%(levelname)s %(message)s")
console_handler.setFormatter(formatter)

logger.addHandler(console_handler)
