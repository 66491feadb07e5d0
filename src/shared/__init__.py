# src/shared/__init__.py
"""
Общий код сервиса.

Модули:
- models: Pydantic-модели поездок, геолокации и ответов API
"""

__all__: list[str] = []
