from services.affinity_engine.definitions import Party
from services.affinity_engine.models import AffinityResult
from vota_informado.synthesis.prompts import (
    build_chat_context,
    build_chat_prompt,
    build_explanation_prompt,
    build_vote_intention_prompt,
    format_party_stances,
    format_top_parties,
    format_user_answers,
    weight_label,
)

RANKING = [
    AffinityResult(party=Party.PSOE, score=81.26),
    AffinityResult(party=Party.PP, score=50.0),
    AffinityResult(party=Party.VOX, score=33.333),
    AffinityResult(party=Party.SUMAR, score=10.0),
]


def test_weight_labels():
    assert weight_label(0) == "Muy poco importante"
    assert weight_label(2) == "Importante"
    assert weight_label(4) == "Extremadamente importante"
    assert weight_label(9) == "Extremadamente importante"


def test_format_top_parties_keeps_three():
    assert format_top_parties(RANKING) == "PSOE (81.3%), PP (50.0%), Vox (33.3%)"


def test_format_user_answers_skips_unanswered(small_data):
    text = format_user_answers({"eco_1": 2, "eco_2": None}, {"economia": 4}, small_data)
    assert text.startswith("Preferencias y respuestas del usuario:\n")
    assert "Tema: Economía (Importancia asignada: Extremadamente importante)" in text
    assert "Tema: Derechos Civiles (Importancia asignada: Importante)" in text
    assert '- Pregunta: "Se deberían bajar los impuestos."\n  - Respuesta del usuario: Totalmente de acuerdo' in text
    assert "grandes fortunas" not in text


def test_format_party_stances(small_data):
    text = format_party_stances(Party.PP, small_data)
    assert text.startswith("Posturas del partido seleccionado (PP):")
    assert "Postura del partido: Neutral / Postura intermedia" in text
    assert "Postura del partido: Totalmente de acuerdo" in text


def test_party_without_stance_is_left_out(small_data):
    text = format_party_stances(Party.VOX, small_data)
    assert "grandes fortunas" not in text


def test_chat_context_lists_summaries_per_topic(small_data):
    context = build_chat_context(small_data)
    assert context == (
        "**Tema: Economía**\n- PP: Menos impuestos.\n- PSOE: Fiscalidad progresiva."
        "\n\n**Tema: Derechos Civiles**\n"
    )


def test_prompts_embed_their_inputs(small_data):
    explanation = build_explanation_prompt(RANKING, {"soc_1": -1}, {}, small_data)
    assert "PSOE (81.3%), PP (50.0%), Vox (33.3%)" in explanation
    assert "Respuesta del usuario: En desacuerdo" in explanation

    intention = build_vote_intention_prompt(Party.PSOE, {"soc_1": -1}, {}, small_data)
    assert "Partido Seleccionado por el Usuario: PSOE" in intention
    assert "Posturas del partido seleccionado (PSOE)" in intention

    chat = build_chat_prompt("¿Y la vivienda?", "CONTEXTO", 7)
    assert "en 7 temas clave" in chat
    assert "CONTEXTO" in chat
    assert chat.rstrip().endswith("¿Y la vivienda?")


def test_format_user_answers_with_out_of_scale_weights(small_data):
    text = format_user_answers({"eco_1": 2}, {"economia": None, "social": 9}, small_data)
    assert "Tema: Economía (Importancia asignada: Importante)" in text
    assert "Tema: Derechos Civiles (Importancia asignada: Importante)" in text
