"""
Направления помощи по умолчанию (кнопка «Заполнить» в админке)
"""

DEFAULT_SERVICES = [
    {
        "slug": "individual-consultations",
        "title": "Консультации психологов",
        "intro": (
            "Индивидуальная поддержка онлайн или в другом удобном формате. "
            "Помогаем снизить тревогу, вернуть опору и ясность."
        ),
        "blocks": [
            {
                "title": "С чем можно обратиться",
                "text": "Тревога, бессонница, утрата близкого, острый стресс, чувство беспомощности.",
            },
            {
                "title": "Как проходит встреча",
                "text": "Первая консультация длится около часа. Психолог выслушает и поможет наметить шаги.",
            },
            {
                "title": "Конфиденциальность",
                "text": "Всё, что вы рассказываете, остаётся между вами и специалистом.",
            },
        ],
        "sort_order": 1,
    },
    {
        "slug": "support-groups",
        "title": "Группы поддержки и терапии",
        "intro": (
            "Встречи, где можно быть услышанным и не оставаться один на один с переживаниями. "
            "Тёплая среда и понятные правила."
        ),
        "blocks": [
            {
                "title": "Формат",
                "text": "Небольшие группы до 10 человек, встречи раз в неделю с ведущим-психологом.",
            },
            {
                "title": "Правила группы",
                "text": "Уважение, конфиденциальность и право не рассказывать больше, чем хочется.",
            },
        ],
        "sort_order": 2,
    },
    {
        "slug": "help-for-families",
        "title": "Информационные ресурсы и помощь близким",
        "intro": (
            "Рекомендации для родных и друзей, ответы на частые вопросы, аккуратные материалы о том, "
            "как поддерживать и не выгорать."
        ),
        "blocks": [
            {
                "title": "Для родных",
                "text": "Как говорить с близким, пережившим тяжёлые события, и когда звать специалиста.",
            },
            {
                "title": "Забота о себе",
                "text": "Поддерживающим тоже нужна поддержка: признаки выгорания и что с ними делать.",
            },
        ],
        "sort_order": 3,
    },
]
