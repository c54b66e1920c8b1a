import pytest
import yaml
from pathlib import Path
from pydantic import ValidationError

from services.affinity_engine.definitions import Party
from services.affinity_engine.engine import DEFAULT_DATASET_PATH
from services.affinity_engine.loader import (
    DatasetValidationError,
    load_political_data,
    load_political_data_from_file,
)
from services.affinity_engine.models import PoliticalData


@pytest.fixture
def valid_dataset_file(tmp_path: Path, small_dataset_dict: dict) -> str:
    file_path = tmp_path / "political_data.yml"
    with open(file_path, "w", encoding="utf-8") as f:
        yaml.dump(small_dataset_dict, f, allow_unicode=True)
    return str(file_path)


def test_successful_parse_from_file(valid_dataset_file: str):
    data = load_political_data_from_file(valid_dataset_file)
    assert isinstance(data, PoliticalData)
    assert [p.name for p in data.parties] == [Party.PP, Party.PSOE, Party.VOX]
    assert [t.id for t in data.topics] == ["economia", "social"]


def test_successful_parse_from_data(small_dataset_dict: dict):
    data = load_political_data(small_dataset_dict)
    question = data.topics[0].questions[0]
    assert question.stance_for(Party.PP) == 2
    assert question.party_stance_for(Party.PP).justification == "Rebaja fiscal"
    # Defaults
    assert data.topics[1].party_topic_summaries is None
    assert data.topics[1].questions[1].ideological_sign.economic == 0


def test_duplicate_party(small_dataset_dict: dict):
    small_dataset_dict["parties"].append({"name": "PP", "color": "#000000"})
    with pytest.raises(DatasetValidationError, match="Duplicate party found: PP"):
        load_political_data(small_dataset_dict)


def test_duplicate_topic_id(small_dataset_dict: dict):
    small_dataset_dict["topics"][1]["id"] = "economia"
    with pytest.raises(DatasetValidationError, match="Duplicate topic ID found: economia"):
        load_political_data(small_dataset_dict)


def test_duplicate_question_id_across_topics(small_dataset_dict: dict):
    small_dataset_dict["topics"][1]["questions"][0]["id"] = "eco_1"
    with pytest.raises(DatasetValidationError, match="Duplicate question ID 'eco_1' in topic 'social'"):
        load_political_data(small_dataset_dict)


def test_duplicate_party_stance(small_dataset_dict: dict):
    small_dataset_dict["topics"][0]["questions"][0]["party_stances"].append({"party": "PSOE", "stance": 0})
    with pytest.raises(DatasetValidationError, match="Duplicate stance for party 'PSOE' in question 'eco_1'"):
        load_political_data(small_dataset_dict)


def test_stance_for_undeclared_party(small_dataset_dict: dict):
    small_dataset_dict["topics"][0]["questions"][0]["party_stances"].append({"party": "BNG", "stance": -2})
    with pytest.raises(DatasetValidationError, match="references undeclared party 'BNG'"):
        load_political_data(small_dataset_dict)


def test_summary_for_undeclared_party(small_dataset_dict: dict):
    small_dataset_dict["topics"][0]["party_topic_summaries"].append({"party": "UPN", "summary": "x"})
    with pytest.raises(DatasetValidationError, match="Topic 'economia' summarizes undeclared party 'UPN'"):
        load_political_data(small_dataset_dict)


def test_stance_out_of_scale(small_dataset_dict: dict):
    small_dataset_dict["topics"][0]["questions"][0]["party_stances"][0]["stance"] = 3
    with pytest.raises(ValidationError):
        load_political_data(small_dataset_dict)


def test_unknown_party_name(small_dataset_dict: dict):
    small_dataset_dict["parties"][0]["name"] = "Partido Inventado"
    with pytest.raises(ValidationError):
        load_political_data(small_dataset_dict)


def test_invalid_axis_sign(small_dataset_dict: dict):
    small_dataset_dict["topics"][0]["questions"][0]["ideological_sign"]["economic"] = 2
    with pytest.raises(ValidationError, match="Input should be -1, 0 or 1"):
        load_political_data(small_dataset_dict)


def test_missing_topics(small_dataset_dict: dict):
    del small_dataset_dict["topics"]
    with pytest.raises(ValidationError, match=r"topics\s+Field required"):
        load_political_data(small_dataset_dict)


def test_load_non_existent_file():
    with pytest.raises(DatasetValidationError, match="File not found: non_existent_data.yml"):
        load_political_data_from_file("non_existent_data.yml")


def test_load_invalid_yaml_file(tmp_path: Path):
    file_path = tmp_path / "invalid_syntax.yml"
    with open(file_path, "w", encoding="utf-8") as f:
        f.write("topics: [id: economia\n  title: Test")
    with pytest.raises(DatasetValidationError, match="Error parsing YAML file"):
        load_political_data_from_file(str(file_path))


def test_load_empty_yaml_file(tmp_path: Path):
    file_path = tmp_path / "empty.yml"
    with open(file_path, "w", encoding="utf-8") as f:
        f.write("")
    with pytest.raises(DatasetValidationError, match="YAML file is empty or invalid"):
        load_political_data_from_file(str(file_path))


def test_shipped_dataset_is_complete():
    data = load_political_data_from_file(str(DEFAULT_DATASET_PATH))
    assert [p.name for p in data.parties] == list(Party)
    assert len(data.topics) == 10
    for topic in data.topics:
        assert len(topic.questions) == 3
        assert {s.party for s in topic.party_topic_summaries} == set(Party)
        for question in topic.questions:
            assert {ps.party for ps in question.party_stances} == set(Party)
