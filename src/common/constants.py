# src/common/constants.py
"""
Общие константы и перечисления.
"""

from enum import Enum


class TypeMsg(str, Enum):
    """Типы сообщений для логирования."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


# Шаблоны ключей Redis
TRIP_KEY = "trip:{trip_id}"
LOCATION_KEY = "trip:{trip_id}:location"

# Префикс идентификатора поездки
TRIP_ID_PREFIX = "trip"
