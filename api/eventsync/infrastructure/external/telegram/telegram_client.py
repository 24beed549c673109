"""
Cliente para enviar mensajes vía Telegram Bot API.
"""
from typing import Optional

import httpx
from loguru import logger


class TelegramClient:
    """
    Cliente simple (síncrono) para la Bot API de Telegram.

    El sync corre en un thread o en un script; no hace falta event loop.
    """
    
    def __init__(self, bot_token: str, *, transport: Optional[httpx.BaseTransport] = None, timeout_s: float = 10.0):
        self.bot_token = bot_token
        self.base_url = f"https://api.telegram.org/bot{self.bot_token}"
        self._transport = transport
        self._timeout_s = timeout_s

    def send_message(self, text: str, chat_id: str) -> bool:
        """
        Envía un mensaje HTML a un chat específico.
        
        Args:
            text: Contenido del mensaje (HTML de Telegram).
            chat_id: ID del chat de destino.

        Returns:
            True si Telegram aceptó el mensaje.
        """
        if not self.bot_token or not chat_id:
            logger.warning("Telegram Bot Token o Chat ID no proporcionados. Saltando notificación.")
            return False

        payload = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": "HTML",
            "disable_web_page_preview": True,
        }

        try:
            with httpx.Client(timeout=self._timeout_s, transport=self._transport) as client:
                response = client.post(f"{self.base_url}/sendMessage", json=payload)
                response.raise_for_status()
                return True
        except httpx.HTTPError as e:
            logger.error(f"Error al enviar mensaje de Telegram al chat {chat_id}: {e}")
            return False
