"""Centralized logging configuration."""

import sys

from loguru import logger as loguru_logger

from src.settings import settings

COMPONENT = 'component'

log_format = ' | '.join(
    (
        '<lk>{time:YYYY-MM-DD HH:mm:ss.SSS}</>',
        '<lvl>{level:<8}</>',
        f'<lg>{{extra[{COMPONENT}]}}</> <c>{{file}}::{{function}}:{{line}}</>',
        '{message}',
    )
)

loguru_logger.remove()  # drop the default handler, use the custom format
custom_logger = loguru_logger.bind(**{COMPONENT: 'app'})

custom_logger.add(sys.stdout, format=log_format, level=settings.LOG_LEVEL)

if settings.LOG_DIR:
    custom_logger.add(
        f'{settings.LOG_DIR}/{{time:YYYY-MM-DD}}.log',
        format=log_format,
        level=settings.LOG_LEVEL,
        rotation='1 day',
        retention='30 days',
        compression='zip',
        enqueue=True,
    )


def get_logger(component: str):
    return custom_logger.bind(**{COMPONENT: component})
