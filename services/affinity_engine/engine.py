import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from . import compass, scorer
from .definitions import DEFAULT_WEIGHT, MIN_ANSWERS_PER_TOPIC, Party
from .loader import load_political_data_from_file
from .models import (
    AffinityResult,
    CompassPoint,
    CompassPosition,
    PartyAffinityDetails,
    PoliticalData,
    Question,
    StanceComparison,
    Topic,
)

logger = logging.getLogger(__name__)

DEFAULT_DATASET_PATH = Path(__file__).resolve().parents[2] / "assets" / "political_data.yml"


class AffinityEngine:
    """
    Loads the political dataset once and exposes the scoring operations over it.
    Every operation takes snapshots of the user's state and returns new results.
    """
    def __init__(self, dataset_path: Optional[str] = None, data: Optional[PoliticalData] = None):
        """
        Args:
            dataset_path: Path to the political dataset YAML file. Ignored when `data` is given.
            data: An already validated dataset.
        """
        if data is None:
            self.dataset_path = Path(dataset_path) if dataset_path else DEFAULT_DATASET_PATH
            data = load_political_data_from_file(str(self.dataset_path))
            logger.info(f"Loaded political dataset from {self.dataset_path}")
        else:
            self.dataset_path = None
        self.data = data
        self._build_lookup_maps()

    def _build_lookup_maps(self):
        """Builds dictionaries for quick lookup of topics and questions."""
        self.topics: Dict[str, Topic] = {t.id: t for t in self.data.topics}
        self.questions: Dict[str, Question] = {q.id: q for t in self.data.topics for q in t.questions}
        self.question_topic: Dict[str, str] = {q.id: t.id for t in self.data.topics for q in t.questions}

    @property
    def parties(self) -> List[Party]:
        return [p.name for p in self.data.parties]

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    def default_weights(self) -> Dict[str, int]:
        return {topic.id: DEFAULT_WEIGHT for topic in self.data.topics}

    def get_questions(self) -> List[Dict[str, Any]]:
        """
        Returns a simplified list of questions for presentation, without party stances.
        """
        return [
            {"id": q.id, "topic_id": t.id, "text": q.text, "description": q.description, "objective": q.objective}
            for t in self.data.topics
            for q in t.questions
        ]

    # --- Completeness ---

    def interacted_count(self, answers: Mapping[str, Optional[int]], topic_id: Optional[str] = None) -> int:
        """Questions the user has touched, skipped ones included."""
        return sum(
            1 for qid in answers
            if qid in self.questions and (topic_id is None or self.question_topic[qid] == topic_id)
        )

    def is_complete(self, answers: Mapping[str, Optional[int]], minimum_per_topic: int = MIN_ANSWERS_PER_TOPIC) -> bool:
        """True once every topic has at least `minimum_per_topic` answered or skipped questions."""
        return all(self.interacted_count(answers, topic.id) >= minimum_per_topic for topic in self.data.topics)

    # --- Scoring ---

    def compute_affinity(self, answers: Mapping[str, Optional[int]], weights: Mapping[str, int]) -> List[AffinityResult]:
        return scorer.compute_affinity(answers, weights, self.data)

    def compute_user_position(self, answers: Mapping[str, Optional[int]]) -> CompassPosition:
        return compass.compute_user_position(answers, self.data)

    def compass_points(
        self,
        answers: Mapping[str, Optional[int]],
        party_coordinates: Optional[Mapping[Party, Tuple[float, float]]] = None
    ) -> List[CompassPoint]:
        return compass.build_compass_points(answers, self.data, party_coordinates)

    def compute_topic_affinities(self, answers: Mapping[str, Optional[int]], selected_parties: Iterable[Party]) -> List[Dict[str, Any]]:
        return scorer.compute_topic_affinities(answers, selected_parties, self.data)

    def party_affinity_details(self, party: Party, answers: Mapping[str, Optional[int]]) -> PartyAffinityDetails:
        return scorer.compute_party_affinity_details(party, answers, self.data)

    def compare_stances(self, party: Party, answers: Mapping[str, Optional[int]], topic_id: Optional[str] = None) -> List[StanceComparison]:
        return scorer.compare_stances(party, answers, self.data, topic_id)
