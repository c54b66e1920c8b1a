# services/affinity_engine/compass.py
# Projects answers onto the economic/social compass.

import logging
from typing import List, Mapping, Optional, Tuple

from .definitions import (
    COMPASS_SCALE,
    PARTY_COMPASS_SIZE,
    PARTY_COORDINATES,
    USER_COMPASS_COLOR,
    USER_COMPASS_LABEL,
    USER_COMPASS_SIZE,
    Party,
)
from .models import Axis, CompassPoint, CompassPosition, Point, PoliticalData
from .scorer import concrete_stance

logger = logging.getLogger(__name__)


def calculate_axis_score(axis: Axis, answers: Mapping[str, Optional[int]], data: PoliticalData) -> float:
    total_score = 0
    answered_count = 0
    for question in data.all_questions():
        answer = concrete_stance(answers, question.id)
        sign = getattr(question.ideological_sign, axis)
        if answer is None or sign == 0:
            continue
        total_score += answer * sign
        answered_count += 1

    if answered_count == 0:
        return 0.0
    return (total_score / answered_count) * COMPASS_SCALE


def compute_user_position(answers: Mapping[str, Optional[int]], data: PoliticalData) -> CompassPosition:
    """Position of the user on both axes, each roughly within [-10, 10]."""
    return CompassPosition(
        economic=calculate_axis_score("economic", answers, data),
        social=calculate_axis_score("social", answers, data),
    )


def build_compass_points(
    answers: Mapping[str, Optional[int]],
    data: PoliticalData,
    party_coordinates: Optional[Mapping[Party, Tuple[float, float]]] = None
) -> List[CompassPoint]:
    """
    Returns the user point followed by every dataset party that has a reference
    coordinate. Parties missing from the coordinate table are left off the compass.
    """
    coordinates = PARTY_COORDINATES if party_coordinates is None else party_coordinates
    position = compute_user_position(answers, data)

    points = [
        CompassPoint(
            name=USER_COMPASS_LABEL,
            coords=Point(x=position.economic, y=position.social),
            color=USER_COMPASS_COLOR,
            size=USER_COMPASS_SIZE,
        )
    ]
    for party_info in data.parties:
        coords = coordinates.get(party_info.name)
        if coords is None:
            logger.debug(f"No compass coordinate for {party_info.name.value}, skipping")
            continue
        points.append(
            CompassPoint(
                name=party_info.name,
                coords=Point(x=coords[0], y=coords[1]),
                color=party_info.color,
                size=PARTY_COMPASS_SIZE,
            )
        )
    return points
