"""
Pydantic схемы запросов и ответов API
"""
