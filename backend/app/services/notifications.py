"""
Уведомления команде проекта в Telegram
"""
import logging
from datetime import datetime

import httpx

from ..config import get_settings
from ..models.booking_request import BookingRequest

settings = get_settings()
logger = logging.getLogger(__name__)


class NotificationService:
    """Отправка сообщений в рабочий чат Telegram"""

    def __init__(self):
        self.bot_token = settings.TELEGRAM_BOT_TOKEN
        self.chat_id = settings.TELEGRAM_CHAT_ID
        self.api_url = f"https://api.telegram.org/bot{self.bot_token}"

    @property
    def is_configured(self) -> bool:
        return bool(self.bot_token and self.chat_id)

    async def send_telegram_message(self, text: str, parse_mode: str = "HTML") -> bool:
        """
        Отправить сообщение в Telegram

        Returns:
            bool: True если отправлено успешно
        """
        if not self.is_configured:
            logger.warning("Telegram не настроен, пропускаем отправку")
            return False

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    f"{self.api_url}/sendMessage",
                    json={
                        "chat_id": self.chat_id,
                        "text": text,
                        "parse_mode": parse_mode
                    },
                    timeout=10.0
                )
        except httpx.HTTPError as e:
            logger.error("Исключение при отправке в Telegram: %s", e)
            return False

        if response.status_code != 200:
            logger.error("Ошибка отправки в Telegram: %s", response.text[:200])
            return False

        logger.info("Уведомление отправлено в чат %s", self.chat_id)
        return True

    async def notify_booking_request(self, booking: BookingRequest) -> bool:
        """Сообщить команде о новой заявке на консультацию"""
        now = datetime.now().strftime("%d.%m.%Y %H:%M")
        message = (
            "📝 <b>НОВАЯ ЗАЯВКА</b>\n"
            "━━━━━━━━━━━━━━━━━━\n\n"
            f"👤 <b>Имя:</b> {booking.name}\n"
            f"📞 <b>Телефон:</b> {booking.phone}\n"
            f"📧 <b>Email:</b> {booking.email or '—'}\n"
            f"💬 <b>Сообщение:</b> {booking.message or '—'}\n\n"
            f"🕐 {now} • ID #{booking.id}"
        )
        return await self.send_telegram_message(message)
