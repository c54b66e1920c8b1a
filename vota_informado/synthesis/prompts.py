# vota_informado/synthesis/prompts.py
# Serializes rankings, answers and party stances into the Spanish prompts sent to the text generator.

from typing import List, Mapping, Optional, Sequence

from services.affinity_engine.definitions import (
    ANSWER_LABELS,
    PARTY_STANCE_LABELS,
    WEIGHT_LABELS,
    Party,
)
from services.affinity_engine.models import AffinityResult, PoliticalData
from services.affinity_engine.scorer import concrete_stance, concrete_weight

TOP_PARTIES_IN_EXPLANATION = 3


def weight_label(weight: int) -> str:
    index = max(0, min(len(WEIGHT_LABELS) - 1, int(weight)))
    return WEIGHT_LABELS[index]


def format_user_answers(
    answers: Mapping[str, Optional[int]],
    weights: Mapping[str, int],
    data: PoliticalData
) -> str:
    """Topic importances plus every question the user gave a concrete answer to."""
    formatted = "Preferencias y respuestas del usuario:\n"
    for topic in data.topics:
        weight = concrete_weight(weights, topic.id)
        formatted += f"\nTema: {topic.title} (Importancia asignada: {weight_label(weight)})\n"
        for question in topic.questions:
            answer = concrete_stance(answers, question.id)
            if answer is None:
                continue
            formatted += f"- Pregunta: \"{question.description}\"\n  - Respuesta del usuario: {ANSWER_LABELS[answer]}\n"
    return formatted


def format_party_stances(party: Party, data: PoliticalData) -> str:
    formatted = f"Posturas del partido seleccionado ({party.value}):\n"
    for topic in data.topics:
        formatted += f"\nTema: {topic.title}\n"
        for question in topic.questions:
            stance = question.stance_for(party)
            if stance is None:
                continue
            formatted += f"- Pregunta: \"{question.description}\"\n  - Postura del partido: {PARTY_STANCE_LABELS[stance]}\n"
    return formatted


def format_top_parties(ranking: Sequence[AffinityResult], limit: int = TOP_PARTIES_IN_EXPLANATION) -> str:
    return ", ".join(f"{result.party.value} ({result.score:.1f}%)" for result in ranking[:limit])


def build_chat_context(data: PoliticalData) -> str:
    """Per-topic party summaries, used as grounding for the chat assistant."""
    sections: List[str] = []
    for topic in data.topics:
        summaries = "\n".join(f"- {s.party.value}: {s.summary}" for s in topic.party_topic_summaries or [])
        sections.append(f"**Tema: {topic.title}**\n{summaries}")
    return "\n\n".join(sections)


def build_explanation_prompt(
    ranking: Sequence[AffinityResult],
    answers: Mapping[str, Optional[int]],
    weights: Mapping[str, int],
    data: PoliticalData
) -> str:
    top_parties = format_top_parties(ranking)
    user_profile = format_user_answers(answers, weights, data)
    return f"""Eres un analista político experto, neutral e imparcial. Tu tarea es explicar de forma razonada y detallada por qué un usuario tiene una determinada afinidad con ciertos partidos políticos españoles, basándote en sus respuestas a un cuestionario.

A continuación se presenta un resumen de los resultados de afinidad y las respuestas del usuario.

Resultados de Afinidad:
El usuario muestra la mayor afinidad con los siguientes partidos: {top_parties}.

{user_profile}

Análisis a realizar:
1.  **Resumen del Perfil Ideológico:** Basándote en el conjunto de sus respuestas, describe brevemente el perfil ideológico general del usuario (p. ej., "perfil progresista en lo social y liberal en lo económico", "perfil conservador en todos los ejes", etc.).
2.  **Análisis por Partido Principal:** Para el partido con mayor afinidad, explica detalladamente por qué existe esa coincidencia. Menciona 2-3 temas o preguntas específicas donde sus posturas son casi idénticas a las del partido.
3.  **Análisis Comparativo:** Compara brevemente por qué tiene afinidad con el segundo y tercer partido. Menciona si la afinidad se debe a los mismos temas que el primer partido o a coincidencias en otros ejes.
4.  **Conclusión Clara y Neutral:** Finaliza con un resumen conciso y neutral, sin dar ninguna recomendación de voto. El objetivo es que el usuario entienda el porqué de sus resultados.

Usa un tono claro, educativo y estrictamente objetivo. Formatea la respuesta usando Markdown para una mejor legibilidad (títulos, listas).
"""


def build_vote_intention_prompt(
    party: Party,
    answers: Mapping[str, Optional[int]],
    weights: Mapping[str, int],
    data: PoliticalData
) -> str:
    user_profile = format_user_answers(answers, weights, data)
    party_stances = format_party_stances(party, data)
    return f"""Eres un analista político experto, neutral y objetivo. Tu tarea es comparar las opiniones de un usuario con el programa del partido político que ha indicado como su intención de voto.

A continuación se presenta el perfil de respuestas del usuario y un resumen de las posturas del partido seleccionado.

Partido Seleccionado por el Usuario: {party.value}

{user_profile}

{party_stances}

Análisis a realizar:
Debes generar un análisis claro y estructurado que contenga lo siguiente:
1.  **Puntos de Máximo Alineamiento:** Identifica de 3 a 4 temas o preguntas específicas donde las respuestas del usuario coinciden fuertemente con la postura de {party.value}. Explica brevemente cada punto.
2.  **Puntos de Mayor Divergencia:** Identifica de 2 a 3 temas o preguntas específicas donde las respuestas del usuario se oponen o difieren significativamente de la postura de {party.value}. Explica brevemente cada punto de fricción.
3.  **Conclusión Neutral:** Escribe un párrafo final que resuma el grado de alineamiento general sin emitir juicios de valor ni recomendaciones. El objetivo es que el usuario pueda reflexionar sobre cómo sus opiniones se comparan con las del partido que piensa votar.

Usa un tono informativo y equilibrado. Formatea la respuesta usando Markdown para que sea fácil de leer (títulos, listas con viñetas).
"""


def build_chat_prompt(question: str, context: str, topic_count: int) -> str:
    return f"""Eres un asistente de IA llamado "Vota Informado", un analista político neutral, experto y bien informado.

**Instrucciones:**
1.  **Proporciona respuestas completas y objetivas:** Utiliza tu conocimiento general y tu acceso a información actualizada de fuentes fiables para responder a la pregunta del usuario sobre el panorama político español.
2.  **Utiliza el contexto como base:** A continuación se te proporciona un resumen de las posturas oficiales de los partidos en {topic_count} temas clave. Utiliza esta información como la base principal para tus respuestas, enriqueciéndola con tu conocimiento general cuando sea apropiado.
3.  **Identifica las posturas de los partidos:** Siempre que sea posible, menciona qué partidos se alinean con las diferentes posturas o hechos que presentas.
4.  **Mantén la neutralidad:** No muestres sesgos ni emitas opiniones. Tu objetivo es informar al usuario de manera equilibrada.
5.  **Formato claro:** Formatea la respuesta usando Markdown para una buena legibilidad.
6.  Si la pregunta no está relacionada con la política española, declina responder amablemente.

**Contexto (Resumen de Posturas de los Partidos en la Aplicación):**
---
{context}
---

**Pregunta del Usuario:**
{question}
"""
