import logging

import colorama

from .utils import color_text


class CustomFormatter(logging.Formatter):
    base_format = "[%(levelname)-8s %(asctime)s]"
    format_colors = {
        logging.DEBUG: colorama.Style.DIM,
        logging.INFO: colorama.Fore.GREEN,
        logging.WARNING: colorama.Fore.YELLOW,
        logging.ERROR: colorama.Fore.RED,
        logging.CRITICAL: colorama.Style.BRIGHT + colorama.Fore.RED,
    }

    def __init__(self) -> None:
        super().__init__(datefmt="%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        formatter = logging.Formatter(
            color_text(self.base_format, self.format_colors.get(record.levelno, ""))
            + " %(message)s",
            datefmt=self.datefmt,
        )
        return formatter.format(record)
