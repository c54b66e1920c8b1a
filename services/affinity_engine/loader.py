import logging
from typing import Any, Dict

import yaml

from services.affinity_engine.models import PoliticalData

logger = logging.getLogger(__name__)


class DatasetValidationError(ValueError):
    """Custom exception for dataset validation errors not covered by Pydantic."""
    pass


def load_political_data(data: Dict[str, Any]) -> PoliticalData:
    """
    Validates the raw dictionary data against the PoliticalData model
    and performs additional cross-reference validations.
    """
    # Schema issues surface as pydantic.ValidationError
    political_data = PoliticalData.model_validate(data)

    declared_parties = set()
    for party_info in political_data.parties:
        if party_info.name in declared_parties:
            raise DatasetValidationError(f"Duplicate party found: {party_info.name.value}")
        declared_parties.add(party_info.name)

    topic_ids = set()
    question_ids = set() # Question IDs are global: every question belongs to exactly one topic

    for topic in political_data.topics:
        if topic.id in topic_ids:
            raise DatasetValidationError(f"Duplicate topic ID found: {topic.id}")
        topic_ids.add(topic.id)

        for question in topic.questions:
            if question.id in question_ids:
                raise DatasetValidationError(f"Duplicate question ID '{question.id}' in topic '{topic.id}'")
            question_ids.add(question.id)

            stanced_parties = set()
            for party_stance in question.party_stances:
                if party_stance.party in stanced_parties:
                    raise DatasetValidationError(
                        f"Duplicate stance for party '{party_stance.party.value}' in question '{question.id}'"
                    )
                if party_stance.party not in declared_parties:
                    raise DatasetValidationError(
                        f"Question '{question.id}' references undeclared party '{party_stance.party.value}'"
                    )
                stanced_parties.add(party_stance.party)

        for summary in topic.party_topic_summaries or []:
            if summary.party not in declared_parties:
                raise DatasetValidationError(
                    f"Topic '{topic.id}' summarizes undeclared party '{summary.party.value}'"
                )

    logger.debug(
        f"Political data validated: {len(political_data.parties)} parties, "
        f"{len(topic_ids)} topics, {len(question_ids)} questions"
    )
    return political_data


def load_political_data_from_file(file_path: str) -> PoliticalData:
    """
    Loads the political dataset from a YAML file, validates it,
    and returns a PoliticalData object.
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise DatasetValidationError(f"File not found: {file_path}")
    except yaml.YAMLError as e:
        raise DatasetValidationError(f"Error parsing YAML file {file_path}: {e}")

    if data is None:
        raise DatasetValidationError(f"YAML file is empty or invalid: {file_path}")

    return load_political_data(data)
