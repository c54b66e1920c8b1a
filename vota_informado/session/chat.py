import logging
from typing import List, Optional

from services.affinity_engine.models import ChatMessage, PoliticalData
from vota_informado.generation.client import TextGenerator
from vota_informado.synthesis import narrator
from vota_informado.synthesis.prompts import build_chat_context

logger = logging.getLogger(__name__)

GREETING = (
    "¡Hola! Soy tu asistente de IA. Puedes preguntarme sobre el panorama político español, "
    "temas de actualidad o las posturas específicas de los partidos.\n\n"
    "Uso la información de esta aplicación como base, pero también mi conocimiento general "
    "para darte respuestas más completas.\n\n"
    "**Aquí tienes algunas ideas:**\n"
    "- *¿Cuál es la situación actual de la ley de vivienda?*\n"
    "- *Compara las propuestas económicas del PP y el PSOE para este año.*\n"
    "- *¿Qué partidos apoyan la energía nuclear?*"
)


class ChatSession:
    def __init__(self, data: PoliticalData, generator: TextGenerator):
        self.data = data
        self.generator = generator
        self.messages: List[ChatMessage] = [ChatMessage(sender="model", text=GREETING)]
        self.is_loading = False

    async def send(self, user_input: str) -> Optional[ChatMessage]:
        """
        Sends a question and appends both sides of the exchange.
        Blank input, or input while a reply is pending, is ignored and returns None.
        """
        if not user_input.strip() or self.is_loading:
            return None

        self.messages.append(ChatMessage(sender="user", text=user_input))
        self.is_loading = True
        try:
            context = build_chat_context(self.data)
            response = await narrator.generate_chat_response(
                user_input, context, self.generator, topic_count=len(self.data.topics)
            )
        finally:
            self.is_loading = False

        reply = ChatMessage(sender="model", text=response)
        self.messages.append(reply)
        logger.debug(f"Chat exchange complete, {len(self.messages)} messages in history")
        return reply
