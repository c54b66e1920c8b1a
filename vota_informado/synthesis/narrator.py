# vota_informado/synthesis/narrator.py
# Asks the text generator to explain results. Failures never propagate: the
# user sees a fixed explanatory message instead.

import logging
from typing import Mapping, Optional, Sequence

from services.affinity_engine.definitions import Party
from services.affinity_engine.models import AffinityResult, PoliticalData
from vota_informado.generation.client import GenerationServiceError, MissingCredentialError, TextGenerator
from vota_informado.synthesis import prompts

logger = logging.getLogger(__name__)

SERVICE_UNAVAILABLE_MESSAGE = "El servicio de análisis por IA no está disponible. Falta la clave de API."
EXPLANATION_ERROR_MESSAGE = "Hubo un error al generar la explicación. Por favor, inténtalo de nuevo más tarde."
ANALYSIS_ERROR_MESSAGE = "Hubo un error al generar el análisis. Por favor, inténtalo de nuevo más tarde."
CHAT_ERROR_MESSAGE = "Hubo un error al comunicarme con la IA. Por favor, inténtalo de nuevo más tarde."

DEFAULT_CHAT_TOPIC_COUNT = 10


async def _generate_or_fallback(generator: TextGenerator, prompt: str, error_message: str, purpose: str) -> str:
    try:
        return await generator.generate(prompt)
    except MissingCredentialError:
        logger.warning(f"Text generation unavailable for {purpose}: missing API key")
        return SERVICE_UNAVAILABLE_MESSAGE
    except GenerationServiceError as e:
        logger.error(f"Error generating {purpose}: {e}")
        return error_message


async def generate_result_explanation(
    ranking: Sequence[AffinityResult],
    answers: Mapping[str, Optional[int]],
    weights: Mapping[str, int],
    data: PoliticalData,
    generator: TextGenerator
) -> str:
    """Explains why the user's top parties rank where they do."""
    prompt = prompts.build_explanation_prompt(ranking, answers, weights, data)
    logger.info(f"Requesting result explanation for top parties: {prompts.format_top_parties(ranking)}")
    return await _generate_or_fallback(generator, prompt, EXPLANATION_ERROR_MESSAGE, "result explanation")


async def generate_vote_intention_analysis(
    party: Party,
    answers: Mapping[str, Optional[int]],
    weights: Mapping[str, int],
    data: PoliticalData,
    generator: TextGenerator
) -> str:
    """Contrasts the user's answers with the stances of the party they intend to vote for."""
    prompt = prompts.build_vote_intention_prompt(party, answers, weights, data)
    logger.info(f"Requesting vote intention analysis for {party.value}")
    return await _generate_or_fallback(generator, prompt, ANALYSIS_ERROR_MESSAGE, "vote intention analysis")


async def generate_chat_response(
    question: str,
    context: str,
    generator: TextGenerator,
    topic_count: int = DEFAULT_CHAT_TOPIC_COUNT
) -> str:
    prompt = prompts.build_chat_prompt(question, context, topic_count)
    return await _generate_or_fallback(generator, prompt, CHAT_ERROR_MESSAGE, "chat response")
