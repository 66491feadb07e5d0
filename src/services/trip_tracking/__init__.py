# src/services/trip_tracking/__init__.py
"""
Trip Tracking — отслеживание поездки в реальном времени.

Обеспечивает:
- Жизненный цикл поездки (создание, старт, завершение, отмена)
- Приём координат водителя и выдачу последней позиции клиенту
- Хранение только в Redis с автоматическим истечением ключей
"""
