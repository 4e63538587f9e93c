"""
Сайт психологической поддержки - backend
"""
