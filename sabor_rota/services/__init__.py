"""Сервисный слой: геокодирование, Places и работа с БД."""
