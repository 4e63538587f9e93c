"""
Бизнес-логика приложения
"""
