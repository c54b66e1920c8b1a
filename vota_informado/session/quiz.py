import logging
import random
from typing import Dict, List, Optional

from services.affinity_engine.definitions import MAX_WEIGHT, MIN_WEIGHT, STANCE_VALUES
from services.affinity_engine.engine import AffinityEngine
from services.affinity_engine.models import (
    AffinityResult,
    AnswerState,
    InvalidAnswerError,
    InvalidWeightError,
    UserAnswers,
    UserWeights,
)

logger = logging.getLogger(__name__)

# What random_fill picks from; None is an explicit skip
RANDOM_FILL_CHOICES: List[Optional[int]] = [*STANCE_VALUES, None]


class QuizSession:
    """
    In-memory answers and topic weights for one user. Nothing is persisted;
    the scoring engine only ever receives copies of this state.
    """
    def __init__(self, engine: AffinityEngine):
        self.engine = engine
        self._answers: UserAnswers = {}
        self._weights: UserWeights = engine.default_weights()

    # --- Mutations ---

    def set_answer(self, question_id: str, stance: Optional[int]) -> None:
        """Records a stance, or None for an explicit 'no opinion'."""
        if question_id not in self.engine.questions:
            raise InvalidAnswerError(f"Unknown question ID: {question_id}")
        if stance is not None and (isinstance(stance, bool) or stance not in STANCE_VALUES):
            raise InvalidAnswerError(f"Invalid stance '{stance}' for question '{question_id}'. Expected one of {list(STANCE_VALUES)} or None.")
        self._answers[question_id] = stance

    def skip_question(self, question_id: str) -> None:
        self.set_answer(question_id, None)

    def clear_answer(self, question_id: str) -> None:
        self._answers.pop(question_id, None)

    def set_weight(self, topic_id: str, weight: int) -> None:
        if topic_id not in self.engine.topics:
            raise InvalidWeightError(f"Unknown topic ID: {topic_id}")
        if isinstance(weight, bool) or not isinstance(weight, int) or not MIN_WEIGHT <= weight <= MAX_WEIGHT:
            raise InvalidWeightError(f"Invalid weight '{weight}' for topic '{topic_id}'. Expected an integer in [{MIN_WEIGHT}, {MAX_WEIGHT}].")
        self._weights[topic_id] = weight

    def random_fill(self, rng: Optional[random.Random] = None) -> None:
        """Answers every question at random, skips included. Replaces all previous answers."""
        rng = rng or random.Random()
        self._answers = {qid: rng.choice(RANDOM_FILL_CHOICES) for qid in self.engine.questions}
        logger.debug(f"Random fill answered {len(self._answers)} questions")

    # --- Queries ---

    def answer_state(self, question_id: str) -> AnswerState:
        if question_id not in self._answers:
            return AnswerState.UNANSWERED
        if self._answers[question_id] is None:
            return AnswerState.SKIPPED
        return AnswerState.ANSWERED

    def answers_snapshot(self) -> UserAnswers:
        return dict(self._answers)

    def weights_snapshot(self) -> UserWeights:
        return dict(self._weights)

    @property
    def answered_count(self) -> int:
        """Questions answered or explicitly skipped."""
        return self.engine.interacted_count(self._answers)

    @property
    def total_questions(self) -> int:
        return self.engine.total_questions

    def topic_progress(self) -> Dict[str, int]:
        return {topic_id: self.engine.interacted_count(self._answers, topic_id) for topic_id in self.engine.topics}

    def is_complete(self) -> bool:
        return self.engine.is_complete(self._answers)

    def affinity_results(self) -> List[AffinityResult]:
        return self.engine.compute_affinity(self.answers_snapshot(), self.weights_snapshot())
