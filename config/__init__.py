"""Конфигурация проекта PowerOCR."""
