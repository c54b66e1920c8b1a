import logging
import sys
from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "vota-informado"

# Third-party loggers that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


class CustomJsonFormatter(JsonFormatter):
    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)
        if not log_record.get('timestamp'):
            log_record['timestamp'] = record.created
        log_record['level'] = (log_record.get('level') or record.levelname).upper()
        log_record['service'] = SERVICE_NAME
        log_record['module'] = record.module
        log_record['lineno'] = record.lineno


def setup_logging(log_level_str: str = "INFO"):
    """
    Configures structured JSON logging on stdout. Safe to call more than once:
    only the level is updated when the handler is already installed.
    """
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    if not any(isinstance(h, logging.StreamHandler) and isinstance(h.formatter, CustomJsonFormatter) for h in root_logger.handlers):
        log_handler = logging.StreamHandler(sys.stdout)
        formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(name)s %(module)s %(lineno)d %(message)s')
        log_handler.setFormatter(formatter)
        root_logger.addHandler(log_handler)
        root_logger.info(f"Structured JSON logging configured with level: {logging.getLevelName(log_level)}")
    else:
        root_logger.info(f"Structured JSON logging already configured. Current level: {logging.getLevelName(root_logger.getEffectiveLevel())}")
