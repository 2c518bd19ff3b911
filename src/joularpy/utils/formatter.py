"""
Single-line log formatter used by every joularpy logger.

Renders records as ``dd/MM/yyyy hh:mm:ss.SSS - [LEVEL] - message``.
"""

import logging
from datetime import datetime

DATE_FORMAT = "%d/%m/%Y %I:%M:%S"


class JoularFormatter(logging.Formatter):
    """
    Formats a record as one line terminated by a newline.

    The hour is on the 12-hour clock unless ``datefmt`` overrides the date
    part; milliseconds are always appended. No state is shared between calls, so
    one instance can serve handlers on any number of threads.
    """

    def formatTime(self, record: logging.LogRecord, datefmt=None) -> str:
        created = datetime.fromtimestamp(record.created)
        millis = int(record.msecs)
        return f"{created.strftime(datefmt or DATE_FORMAT)}.{millis:03d}"

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            message = f"{message}\n{record.exc_text}"
        return f"{self.formatTime(record, self.datefmt)} - [{record.levelname}] - {message}\n"
