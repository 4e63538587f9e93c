"""
Кеш публичных страниц с инвалидацией по пути
"""
import logging
import threading
from typing import Any, Callable, Dict, Tuple

logger = logging.getLogger(__name__)


class PageCache:
    """Хранит собранные данные страниц по пути ("/", "/reviews", "/services/slug").

    После изменения контента нужные пути сбрасываются через revalidate(),
    и следующий запрос собирает страницу заново из базы.

    Страница собирается без блокировки. Если путь сбросили во время сборки,
    результат отдаётся текущему запросу, но в кеш не попадает.
    """

    def __init__(self):
        self._entries: Dict[str, Any] = {}
        # Номер сброса для каждого пути и общий номер для сбросов с layout=True
        self._generations: Dict[str, int] = {}
        self._epoch = 0
        self._lock = threading.Lock()

    def _stamp(self, path: str) -> Tuple[int, int]:
        return self._epoch, self._generations.get(path, 0)

    def get_or_build(self, path: str, builder: Callable[[], Any]) -> Any:
        with self._lock:
            if path in self._entries:
                return self._entries[path]
            stamp = self._stamp(path)

        # Исключение из builder (например, 404) не кешируется
        payload = builder()

        with self._lock:
            if self._stamp(path) == stamp:
                self._entries[path] = payload
            else:
                logger.debug("Страница %s сброшена во время сборки, не кешируем", path)
        return payload

    def revalidate(self, path: str, layout: bool = False) -> None:
        """Сбросить путь; layout=True - ещё и все вложенные пути"""
        with self._lock:
            self._generations[path] = self._generations.get(path, 0) + 1
            if not layout:
                self._entries.pop(path, None)
                return

            self._epoch += 1
            prefix = path.rstrip("/") + "/"
            for key in list(self._entries):
                if key == path or key.startswith(prefix):
                    del self._entries[key]

    def has(self, path: str) -> bool:
        with self._lock:
            return path in self._entries

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._epoch += 1


page_cache = PageCache()


def revalidate_path(*paths: str, layout: bool = False) -> None:
    for path in paths:
        page_cache.revalidate(path, layout=layout)
    logger.debug("Сброшен кеш страниц: %s", ", ".join(paths))
