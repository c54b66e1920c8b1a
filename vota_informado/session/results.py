import logging
from typing import Any, Dict, List, Optional

from services.affinity_engine.definitions import MAX_RADAR_PARTIES, Party
from services.affinity_engine.models import AffinityResult, CompassPoint, StanceComparison
from vota_informado.generation.client import TextGenerator
from vota_informado.session.quiz import QuizSession
from vota_informado.synthesis import narrator

logger = logging.getLogger(__name__)

FALLBACK_PARTY = Party.PP


class ResultsView:
    """
    State behind the results screen: radar party selection, the party chosen
    for the vote-intention analysis, and the generated texts. Every derived
    value is recomputed from the quiz snapshots on request.
    """
    def __init__(self, quiz: QuizSession, generator: TextGenerator):
        self.quiz = quiz
        self.generator = generator

        top_party = self.top_party()
        self.selected_radar_parties: List[Party] = [top_party]
        self.intention_party: Party = top_party

        self.explanation: str = ""
        self.intention_analysis: str = ""
        self.is_loading: bool = False

    @property
    def engine(self):
        return self.quiz.engine

    def ranking(self) -> List[AffinityResult]:
        if self.quiz.answered_count == 0:
            return []
        return self.quiz.affinity_results()

    def top_party(self) -> Party:
        ranking = self.ranking()
        return ranking[0].party if ranking else FALLBACK_PARTY

    # --- Radar ---

    def toggle_radar_party(self, party: Party) -> List[Party]:
        """Removes a selected party, or adds it while fewer than MAX_RADAR_PARTIES are selected."""
        if party in self.selected_radar_parties:
            self.selected_radar_parties = [p for p in self.selected_radar_parties if p != party]
        elif len(self.selected_radar_parties) < MAX_RADAR_PARTIES:
            self.selected_radar_parties = [*self.selected_radar_parties, party]
        else:
            logger.debug(f"Radar already compares {MAX_RADAR_PARTIES} parties, ignoring {party.value}")
        return list(self.selected_radar_parties)

    @property
    def radar_limit_reached(self) -> bool:
        return len(self.selected_radar_parties) >= MAX_RADAR_PARTIES

    def radar_data(self) -> List[Dict[str, Any]]:
        return self.engine.compute_topic_affinities(self.quiz.answers_snapshot(), self.selected_radar_parties)

    # --- Compass and stance comparison ---

    def compass_points(self) -> List[CompassPoint]:
        return self.engine.compass_points(self.quiz.answers_snapshot())

    def stance_comparison(self, party: Party, topic_id: Optional[str] = None) -> List[StanceComparison]:
        return self.engine.compare_stances(party, self.quiz.answers_snapshot(), topic_id)

    # --- Generated analysis ---

    def select_intention_party(self, party: Party) -> None:
        self.intention_party = party

    async def request_explanation(self) -> Optional[str]:
        """Returns the new explanation, or None when another request is still in flight."""
        if self.is_loading:
            logger.debug("Explanation requested while a generation is in flight, ignoring")
            return None
        self.is_loading = True
        self.explanation = ""
        try:
            self.explanation = await narrator.generate_result_explanation(
                self.ranking(),
                self.quiz.answers_snapshot(),
                self.quiz.weights_snapshot(),
                self.engine.data,
                self.generator,
            )
        finally:
            self.is_loading = False
        return self.explanation

    async def request_intention_analysis(self) -> Optional[str]:
        """Returns the new analysis, or None when another request is still in flight."""
        if self.is_loading:
            logger.debug("Vote intention analysis requested while a generation is in flight, ignoring")
            return None
        self.is_loading = True
        self.intention_analysis = ""
        try:
            self.intention_analysis = await narrator.generate_vote_intention_analysis(
                self.intention_party,
                self.quiz.answers_snapshot(),
                self.quiz.weights_snapshot(),
                self.engine.data,
                self.generator,
            )
        finally:
            self.is_loading = False
        return self.intention_analysis
