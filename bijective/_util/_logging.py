import contextvars
import logging
import sys
import uuid

import colorlog

_PRINTK_PREFIXES = {
    logging.CRITICAL: "<2>",
    logging.ERROR: "<3>",
    logging.WARNING: "<4>",
    logging.INFO: "<6>",
    logging.DEBUG: "<7>",
}
_check_id = contextvars.ContextVar("check_id")


def configure_logging(level):
    root = logging.getLogger()
    root.setLevel(level)

    if len(root.handlers) == 0:
        handler = logging.StreamHandler()

        if sys.stderr.isatty():
            formatter = colorlog.ColoredFormatter(
                "%(asctime)s %(light_black)s%(check_id)s%(name)s %(log_color)s%(message)s",
                log_colors={
                    "DEBUG": "light_black",
                    "INFO": "reset",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "bold_red",
                },
            )
        else:
            formatter = _PrintKFormatter(
                "%(level_prefix)s%(check_id)s%(name)s %(message)s"
            )

        handler.setFormatter(formatter)
        handler.addFilter(_inject_check_id)
        root.addHandler(handler)


class _PrintKFormatter(logging.Formatter):
    def format(self, record):
        record.level_prefix = _PRINTK_PREFIXES.get(record.levelno, "")
        return super().format(record)


def generate_log_check_id():
    check_id = uuid.uuid4().hex[:8]
    _check_id.set(check_id)
    return check_id


def _inject_check_id(record):
    check_id = _check_id.get(None)
    record.check_id = f"{check_id} " if check_id else ""
    return True
