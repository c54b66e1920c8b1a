# services/affinity_engine/scorer.py
# Affinity scoring between a user's answers and each party's stances.

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .definitions import DEFAULT_WEIGHT, MAX_STANCE_DISTANCE, MAX_WEIGHT, MIN_WEIGHT, STANCE_VALUES, Party
from .models import (
    AffinityResult,
    PartyAffinityDetails,
    PoliticalData,
    Question,
    StanceComparison,
    Topic,
    TopicAffinity,
)

logger = logging.getLogger(__name__)


def concrete_stance(answers: Mapping[str, Optional[int]], question_id: str) -> Optional[int]:
    """Returns the user's stance for a question, or None when it was skipped or never answered."""
    answer = answers.get(question_id)
    if answer is None or isinstance(answer, bool) or answer not in STANCE_VALUES:
        return None
    return answer


def concrete_weight(weights: Mapping[str, int], topic_id: str) -> int:
    """Returns the topic importance, or DEFAULT_WEIGHT when it is missing or outside the 0-4 scale."""
    weight = weights.get(topic_id)
    if weight is None or isinstance(weight, bool) or not isinstance(weight, int) or not MIN_WEIGHT <= weight <= MAX_WEIGHT:
        return DEFAULT_WEIGHT
    return weight


def question_affinity(user_stance: int, party_stance: int) -> float:
    """1.0 for identical stances, 0.0 for opposite extremes (-2 vs +2), linear in between."""
    distance = abs(user_stance - party_stance)
    return (MAX_STANCE_DISTANCE - distance) / MAX_STANCE_DISTANCE


def _topic_affinity_sum(
    topic: Topic,
    party: Party,
    answers: Mapping[str, Optional[int]]
) -> Tuple[float, int]:
    """Sum of question affinities and number of questions scorable for this party."""
    affinity_sum = 0.0
    count = 0
    for question in topic.questions:
        user_stance = concrete_stance(answers, question.id)
        party_stance = question.stance_for(party)
        if user_stance is None or party_stance is None:
            continue
        affinity_sum += question_affinity(user_stance, party_stance)
        count += 1
    return affinity_sum, count


def calculate_party_score(
    party: Party,
    answers: Mapping[str, Optional[int]],
    weights: Mapping[str, int],
    data: PoliticalData
) -> float:
    """Weighted mean of topic affinities for one party, as a 0-100 percentage."""
    total_weighted_affinity = 0.0
    total_weight = 0

    for topic in data.topics:
        affinity_sum, count = _topic_affinity_sum(topic, party, answers)
        if count == 0:
            # Topics without scorable questions are left out of both sums
            continue
        effective_weight = concrete_weight(weights, topic.id) + 1
        total_weighted_affinity += (affinity_sum / count) * effective_weight
        total_weight += effective_weight

    if total_weight <= 0:
        return 0.0
    return (total_weighted_affinity / total_weight) * 100


def compute_affinity(
    answers: Mapping[str, Optional[int]],
    weights: Mapping[str, int],
    data: PoliticalData
) -> List[AffinityResult]:
    """
    Computes the weighted affinity of the user with every party in the dataset.

    Args:
        answers: question_id -> stance (-2..2), None for skipped questions.
        weights: topic_id -> importance (0..4). Missing topics count as the default weight.
        data: The static political dataset.

    Returns:
        AffinityResult entries sorted by descending score. Parties with equal
        scores keep their dataset order.
    """
    results = [
        AffinityResult(party=party_info.name, score=calculate_party_score(party_info.name, answers, weights, data))
        for party_info in data.parties
    ]
    ranking = sorted(results, key=lambda result: result.score, reverse=True)
    logger.debug(f"Affinity ranking computed: {[(r.party.value, round(r.score, 1)) for r in ranking[:3]]}")
    return ranking


def calculate_topic_affinity(
    topic: Topic,
    party: Party,
    answers: Mapping[str, Optional[int]]
) -> float:
    """Unweighted topic affinity (0-100, one decimal). 0 when nothing is scorable."""
    affinity_sum, count = _topic_affinity_sum(topic, party, answers)
    affinity = (affinity_sum / count) * 100 if count > 0 else 0.0
    return round(affinity, 1)


def compute_topic_affinities(
    answers: Mapping[str, Optional[int]],
    selected_parties: Iterable[Party],
    data: PoliticalData
) -> List[Dict[str, Any]]:
    """
    Builds the radar series: one row per topic (dataset order) holding the
    topic title under 'topic' and the affinity of each selected party under
    the party name.
    """
    parties = list(selected_parties)
    rows: List[Dict[str, Any]] = []
    for topic in data.topics:
        row: Dict[str, Any] = {"topic": topic.title}
        for party in parties:
            row[party.value] = calculate_topic_affinity(topic, party, answers)
        rows.append(row)
    return rows


def compute_party_affinity_details(
    party: Party,
    answers: Mapping[str, Optional[int]],
    data: PoliticalData
) -> PartyAffinityDetails:
    return PartyAffinityDetails(
        party=party,
        topic_affinities=[
            TopicAffinity(topic=topic.title, affinity=calculate_topic_affinity(topic, party, answers))
            for topic in data.topics
        ],
    )


def _compare_question(topic_id: str, question: Question, party: Party, answers: Mapping[str, Optional[int]]) -> StanceComparison:
    user_stance = concrete_stance(answers, question.id)
    party_stance = question.party_stance_for(party)
    affinity = None
    if user_stance is not None and party_stance is not None:
        affinity = question_affinity(user_stance, party_stance.stance)
    return StanceComparison(
        topic_id=topic_id,
        question_id=question.id,
        description=question.description,
        user_answer=user_stance,
        party_stance=party_stance.stance if party_stance else None,
        justification=party_stance.justification if party_stance else "",
        affinity=affinity,
    )


def compare_stances(
    party: Party,
    answers: Mapping[str, Optional[int]],
    data: PoliticalData,
    topic_id: Optional[str] = None
) -> List[StanceComparison]:
    """Side-by-side view of the user's answers and a party's stances, optionally for a single topic."""
    return [
        _compare_question(topic.id, question, party, answers)
        for topic in data.topics
        if topic_id is None or topic.id == topic_id
        for question in topic.questions
    ]
