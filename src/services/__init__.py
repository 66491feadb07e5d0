# src/services/__init__.py
"""
Сервисы приложения.

Архитектура:
- Один FastAPI-процесс, общее хранилище — Redis с TTL
- Компоненты не вызывают друг друга напрямую, только через хранилище

Сервисы:
- trip_tracking: жизненный цикл поездки + последняя позиция водителя
"""

__all__: list[str] = []
