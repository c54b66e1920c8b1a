import copy
from typing import List

import pytest

from services.affinity_engine.engine import AffinityEngine
from services.affinity_engine.loader import load_political_data
from services.affinity_engine.models import PoliticalData
from vota_informado.generation.client import GenerationServiceError, MissingCredentialError, TextGenerator

# Two topics, three parties. Vox has no stance on eco_2.
SMALL_DATASET = {
    "parties": [
        {"name": "PP", "color": "#1D84CE"},
        {"name": "PSOE", "color": "#E1001A"},
        {"name": "Vox", "color": "#63BE21"},
    ],
    "topics": [
        {
            "id": "economia",
            "title": "Economía",
            "description": "Impuestos y gasto público",
            "questions": [
                {
                    "id": "eco_1",
                    "text": "Bajada de impuestos",
                    "description": "Se deberían bajar los impuestos.",
                    "party_stances": [
                        {"party": "PP", "stance": 2, "justification": "Rebaja fiscal"},
                        {"party": "PSOE", "stance": -2},
                        {"party": "Vox", "stance": 1},
                    ],
                    "ideological_sign": {"economic": 1, "social": 0},
                },
                {
                    "id": "eco_2",
                    "text": "Impuesto a grandes fortunas",
                    "description": "Debe mantenerse el impuesto a las grandes fortunas.",
                    "party_stances": [
                        {"party": "PP", "stance": 1},
                        {"party": "PSOE", "stance": -1},
                    ],
                    "ideological_sign": {"economic": -1, "social": 0},
                },
            ],
            "party_topic_summaries": [
                {"party": "PP", "summary": "Menos impuestos."},
                {"party": "PSOE", "summary": "Fiscalidad progresiva."},
            ],
        },
        {
            "id": "social",
            "title": "Derechos Civiles",
            "questions": [
                {
                    "id": "soc_1",
                    "text": "Eutanasia",
                    "description": "La ley de eutanasia debe mantenerse.",
                    "party_stances": [
                        {"party": "PP", "stance": -1},
                        {"party": "PSOE", "stance": 2},
                        {"party": "Vox", "stance": -2},
                    ],
                    "ideological_sign": {"economic": 0, "social": 1},
                },
                {
                    "id": "soc_2",
                    "text": "Amnistía",
                    "description": "La amnistía fue adecuada.",
                    "party_stances": [
                        {"party": "PP", "stance": 0},
                        {"party": "PSOE", "stance": 1},
                        {"party": "Vox", "stance": -2},
                    ],
                },
            ],
        },
    ],
}


@pytest.fixture
def small_dataset_dict() -> dict:
    return copy.deepcopy(SMALL_DATASET)


@pytest.fixture
def small_data(small_dataset_dict) -> PoliticalData:
    return load_political_data(small_dataset_dict)


@pytest.fixture
def small_engine(small_data) -> AffinityEngine:
    return AffinityEngine(data=small_data)


class FakeTextGenerator(TextGenerator):
    """Returns canned text, or raises `error` when set. Records every prompt."""
    def __init__(self, text: str = "Texto generado", error: Exception = None):
        self.text = text
        self.error = error
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def fake_generator() -> FakeTextGenerator:
    return FakeTextGenerator()


@pytest.fixture
def failing_generator() -> FakeTextGenerator:
    return FakeTextGenerator(error=GenerationServiceError("boom"))


@pytest.fixture
def unconfigured_generator() -> FakeTextGenerator:
    return FakeTextGenerator(error=MissingCredentialError("no key"))
