import logging
from dataclasses import dataclass
from typing import Optional

from services.affinity_engine.engine import AffinityEngine
from vota_informado.config import AppSettings, GeminiSettings
from vota_informado.generation.client import GeminiTextGenerator, TextGenerator
from vota_informado.logging_config import setup_logging
from vota_informado.session import ChatSession, QuizSession, ResultsView

logger = logging.getLogger(__name__)


@dataclass
class VotaInformado:
    """Wires the engine and the text generator shared by every user session."""
    engine: AffinityEngine
    generator: TextGenerator

    def new_quiz(self) -> QuizSession:
        return QuizSession(self.engine)

    def results_for(self, quiz: QuizSession) -> ResultsView:
        return ResultsView(quiz, self.generator)

    def new_chat(self) -> ChatSession:
        return ChatSession(self.engine.data, self.generator)


def create_app(
    app_settings: Optional[AppSettings] = None,
    gemini_settings: Optional[GeminiSettings] = None,
    generator: Optional[TextGenerator] = None
) -> VotaInformado:
    app_settings = app_settings or AppSettings()
    setup_logging(app_settings.log_level)

    engine = AffinityEngine(dataset_path=app_settings.dataset_path)
    if generator is None:
        gemini = GeminiTextGenerator(gemini_settings)
        if not gemini.is_configured:
            logger.warning("GEMINI_API_KEY is not set; AI explanations will show the unavailable message.")
        generator = gemini

    logger.info(f"Vota Informado ready: {len(engine.parties)} parties, {engine.total_questions} questions")
    return VotaInformado(engine=engine, generator=generator)
