"""
Админ-панель
Доступ: http://localhost:8000/admin
Логин: ADMIN_EMAIL / Пароль: ADMIN_PASSWORD из .env
"""
import logging

from sqladmin import Admin, ModelView, action
from sqladmin.authentication import AuthenticationBackend
from starlette.requests import Request
from starlette.responses import RedirectResponse

from .config import get_settings
from .models.booking_request import BookingRequest
from .models.event import Event
from .models.photo_report import PhotoReport
from .models.review import Review
from .models.service import Service
from .models.site_text import SiteText
from .models.specialist import Specialist
from .security import current_admin, login_session, logout_session, verify_admin_credentials
from .services.content import normalize_slug
from .services.page_cache import revalidate_path
from .services.reviews import REVIEW_PAGES, approve_review, reject_review
from .services.site_texts import clean_override

settings = get_settings()
logger = logging.getLogger(__name__)


class AdminAuth(AuthenticationBackend):
    """Вход по тем же данным и той же сессии, что и API"""

    async def login(self, request: Request) -> bool:
        form = await request.form()
        email = form.get("username")
        password = form.get("password")

        if verify_admin_credentials(email, password):
            login_session(request, email.strip())
            return True
        logger.warning("Неудачный вход в админ-панель: %s", email)
        return False

    async def logout(self, request: Request) -> bool:
        logout_session(request)
        return True

    async def authenticate(self, request: Request) -> bool:
        return bool(current_admin(request))


# ==================== МОДЕЛИ ДЛЯ АДМИНКИ ====================

class ReviewAdmin(ModelView, model=Review):
    """Отзывы: модерация только через действия"""
    name = "Отзыв"
    name_plural = "Отзывы"
    icon = "fa-solid fa-star"

    can_create = False
    can_edit = False

    column_list = [
        Review.id,
        Review.status,
        Review.author_name,
        Review.is_anonymous,
        Review.rating,
        Review.text,
        Review.created_at,
        Review.approved_at
    ]
    column_searchable_list = [Review.author_name, Review.text]
    column_sortable_list = [Review.status, Review.rating, Review.created_at]
    column_default_sort = [(Review.created_at, True)]
    column_details_exclude_list = [Review.ip_hash]

    column_labels = {
        "id": "ID",
        "status": "Статус",
        "author_name": "Имя",
        "is_anonymous": "Анонимно",
        "rating": "Оценка",
        "text": "Текст",
        "created_at": "Дата",
        "approved_at": "Опубликован"
    }

    def _moderate(self, request: Request, handler) -> RedirectResponse:
        pks = request.query_params.get("pks", "")
        with self.session_maker() as session:
            for pk in pks.split(","):
                if pk.strip():
                    handler(session, int(pk))
        return RedirectResponse(request.url_for("admin:list", identity=self.identity))

    @action(
        name="approve",
        label="Опубликовать",
        confirmation_message="Опубликовать выбранные отзывы?",
        add_in_detail=True,
        add_in_list=True,
    )
    async def approve(self, request: Request):
        return self._moderate(request, approve_review)

    @action(
        name="reject",
        label="Отклонить",
        confirmation_message="Отклонить выбранные отзывы?",
        add_in_detail=True,
        add_in_list=True,
    )
    async def reject(self, request: Request):
        return self._moderate(request, reject_review)

    async def after_model_delete(self, model, request: Request) -> None:
        revalidate_path(*REVIEW_PAGES)


class SpecialistAdmin(ModelView, model=Specialist):
    """Специалисты"""
    name = "Специалист"
    name_plural = "Специалисты"
    icon = "fa-solid fa-user-doctor"

    column_list = [
        Specialist.id,
        Specialist.name,
        Specialist.slug,
        Specialist.role,
        Specialist.is_published,
        Specialist.sort_order
    ]
    column_searchable_list = [Specialist.name, Specialist.slug]
    column_sortable_list = [Specialist.sort_order, Specialist.name, Specialist.created_at]
    column_default_sort = [(Specialist.sort_order, False)]
    form_excluded_columns = [Specialist.created_at, Specialist.updated_at]

    column_labels = {
        "id": "ID",
        "name": "Имя",
        "slug": "Адрес страницы",
        "role": "Роль",
        "badge": "Бейдж",
        "badge_tone": "Цвет бейджа",
        "excerpt": "Кратко",
        "bio": "О специалисте",
        "image_url": "Фото",
        "is_published": "Опубликован",
        "sort_order": "Порядок"
    }

    async def on_model_change(self, data: dict, model, is_created: bool, request: Request) -> None:
        slug = normalize_slug(data.get("slug") or data.get("name"))
        if not slug:
            raise ValueError("Некорректный адрес страницы")
        data["slug"] = slug

    async def after_model_change(self, data: dict, model, is_created: bool, request: Request) -> None:
        revalidate_path("/", "/admin/specialists")
        revalidate_path("/specialists", layout=True)

    async def after_model_delete(self, model, request: Request) -> None:
        revalidate_path("/", "/admin/specialists")
        revalidate_path("/specialists", layout=True)


class ServiceAdmin(ModelView, model=Service):
    """Направления помощи"""
    name = "Направление"
    name_plural = "Направления"
    icon = "fa-solid fa-hands-holding-heart"

    column_list = [
        Service.id,
        Service.title,
        Service.slug,
        Service.is_published,
        Service.sort_order
    ]
    column_searchable_list = [Service.title, Service.slug]
    column_sortable_list = [Service.sort_order, Service.title, Service.created_at]
    column_default_sort = [(Service.sort_order, False)]
    form_excluded_columns = [Service.created_at, Service.updated_at]

    column_labels = {
        "id": "ID",
        "title": "Название",
        "slug": "Адрес страницы",
        "intro": "Вступление",
        "blocks": "Блоки",
        "is_published": "Опубликовано",
        "sort_order": "Порядок"
    }

    async def on_model_change(self, data: dict, model, is_created: bool, request: Request) -> None:
        slug = normalize_slug(data.get("slug"))
        if not slug:
            raise ValueError("Некорректный адрес страницы")
        data["slug"] = slug

    async def after_model_change(self, data: dict, model, is_created: bool, request: Request) -> None:
        revalidate_path("/services", layout=True)

    async def after_model_delete(self, model, request: Request) -> None:
        revalidate_path("/services", layout=True)


class EventAdmin(ModelView, model=Event):
    """Мероприятия"""
    name = "Мероприятие"
    name_plural = "Мероприятия"
    icon = "fa-solid fa-calendar-days"

    column_list = [
        Event.id,
        Event.title,
        Event.date,
        Event.place,
        Event.is_published
    ]
    column_searchable_list = [Event.title, Event.place]
    column_sortable_list = [Event.date, Event.title]
    column_default_sort = [(Event.date, True)]
    form_excluded_columns = [Event.created_at, Event.updated_at]

    column_labels = {
        "id": "ID",
        "title": "Название",
        "description": "Описание",
        "date": "Дата",
        "place": "Место",
        "image_url": "Изображение",
        "is_published": "Опубликовано"
    }

    async def after_model_change(self, data: dict, model, is_created: bool, request: Request) -> None:
        revalidate_path("/", "/events", f"/events/{model.id}")

    async def after_model_delete(self, model, request: Request) -> None:
        revalidate_path("/", "/events", f"/events/{model.id}")


class PhotoReportAdmin(ModelView, model=PhotoReport):
    """Фотоотчёты"""
    name = "Фото"
    name_plural = "Фотоотчёты"
    icon = "fa-solid fa-images"

    column_list = [
        PhotoReport.id,
        PhotoReport.title,
        PhotoReport.image_url,
        PhotoReport.is_published,
        PhotoReport.sort_order
    ]
    column_sortable_list = [PhotoReport.sort_order, PhotoReport.created_at]
    column_default_sort = [(PhotoReport.sort_order, False)]
    form_excluded_columns = [PhotoReport.created_at]

    column_labels = {
        "id": "ID",
        "title": "Подпись",
        "image_url": "Изображение",
        "is_published": "Опубликовано",
        "sort_order": "Порядок"
    }

    async def after_model_change(self, data: dict, model, is_created: bool, request: Request) -> None:
        revalidate_path("/gallery", "/admin/gallery")

    async def after_model_delete(self, model, request: Request) -> None:
        revalidate_path("/gallery", "/admin/gallery")


class BookingRequestAdmin(ModelView, model=BookingRequest):
    """Заявки на консультацию"""
    name = "Заявка"
    name_plural = "Заявки"
    icon = "fa-solid fa-clipboard-list"

    can_create = False

    column_list = [
        BookingRequest.id,
        BookingRequest.name,
        BookingRequest.phone,
        BookingRequest.status,
        BookingRequest.telegram_sent,
        BookingRequest.created_at
    ]
    column_searchable_list = [BookingRequest.name, BookingRequest.phone]
    column_sortable_list = [BookingRequest.created_at, BookingRequest.status]
    column_default_sort = [(BookingRequest.created_at, True)]

    column_labels = {
        "id": "ID",
        "name": "Имя",
        "phone": "Телефон",
        "email": "Email",
        "message": "Сообщение",
        "status": "Статус",
        "telegram_sent": "Отправлено в TG",
        "created_at": "Создано"
    }


class SiteTextAdmin(ModelView, model=SiteText):
    """Переопределённые тексты сайта"""
    name = "Текст"
    name_plural = "Тексты сайта"
    icon = "fa-solid fa-font"

    form_include_pk = True
    column_list = [SiteText.key, SiteText.value, SiteText.updated_at]
    column_searchable_list = [SiteText.key, SiteText.value]
    form_excluded_columns = [SiteText.updated_at]

    column_labels = {
        "key": "Ключ",
        "value": "Значение",
        "updated_at": "Изменено"
    }

    async def on_model_change(self, data: dict, model, is_created: bool, request: Request) -> None:
        key = (data.get("key") or model.key or "").strip()
        data["key"] = key
        data["value"] = clean_override(key, data.get("value"))

    async def after_model_change(self, data: dict, model, is_created: bool, request: Request) -> None:
        revalidate_path("/admin/texts")
        revalidate_path("/", layout=True)

    async def after_model_delete(self, model, request: Request) -> None:
        revalidate_path("/admin/texts")
        revalidate_path("/", layout=True)


def setup_admin(app, engine):
    """Настройка админ-панели"""
    authentication_backend = AdminAuth(secret_key=settings.SECRET_KEY)

    admin = Admin(
        app,
        engine,
        authentication_backend=authentication_backend,
        title="Панель поддержки",
        base_url="/admin"
    )

    # Регистрация моделей
    admin.add_view(ReviewAdmin)
    admin.add_view(SpecialistAdmin)
    admin.add_view(ServiceAdmin)
    admin.add_view(EventAdmin)
    admin.add_view(PhotoReportAdmin)
    admin.add_view(BookingRequestAdmin)
    admin.add_view(SiteTextAdmin)

    return admin
