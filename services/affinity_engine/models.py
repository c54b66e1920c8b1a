from enum import Enum
from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .definitions import Party

Stance = Literal[-2, -1, 0, 1, 2] # -2: Totally Disagree, 2: Totally Agree
AxisSign = Literal[-1, 0, 1]
Axis = Literal["economic", "social"]

# question_id -> stance, or None for an explicit "no opinion"; missing key means untouched
UserAnswers = Dict[str, Optional[int]]
# topic_id -> importance level 0..4
UserWeights = Dict[str, int]


class AnswerState(str, Enum):
    UNANSWERED = "unanswered"
    SKIPPED = "skipped"
    ANSWERED = "answered"


class PartyInfo(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Party
    color: str


class PartyStance(BaseModel):
    model_config = ConfigDict(frozen=True)

    party: Party
    stance: Stance
    justification: str = ""


class IdeologicalSign(BaseModel):
    model_config = ConfigDict(frozen=True)

    economic: AxisSign = 0
    social: AxisSign = 0


class Question(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    description: str # The statement the user and parties are ranked against
    objective: str = "" # Why the question is asked
    party_stances: List[PartyStance] = Field(default_factory=list)
    ideological_sign: IdeologicalSign = Field(default_factory=IdeologicalSign)

    def stance_for(self, party: Party) -> Optional[int]:
        for party_stance in self.party_stances:
            if party_stance.party == party:
                return party_stance.stance
        return None

    def party_stance_for(self, party: Party) -> Optional[PartyStance]:
        return next((ps for ps in self.party_stances if ps.party == party), None)


class PartyTopicSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    party: Party
    summary: str


class Topic(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    questions: List[Question]
    party_topic_summaries: Optional[List[PartyTopicSummary]] = None


class PoliticalData(BaseModel):
    model_config = ConfigDict(frozen=True)

    topics: List[Topic]
    parties: List[PartyInfo]

    def all_questions(self) -> List[Question]:
        return [q for topic in self.topics for q in topic.questions]

    def party_info(self, party: Party) -> Optional[PartyInfo]:
        return next((p for p in self.parties if p.name == party), None)


# --- Results ---

class AffinityResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    party: Party
    score: float # 0-100


class TopicAffinity(BaseModel):
    model_config = ConfigDict(frozen=True)

    topic: str
    affinity: float # 0-100


class PartyAffinityDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    party: Party
    topic_affinities: List[TopicAffinity]


class CompassPosition(BaseModel):
    model_config = ConfigDict(frozen=True)

    economic: float
    social: float


class Point(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class CompassPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Union[Party, str] # a Party, or the user label
    coords: Point
    color: str
    size: int


class StanceComparison(BaseModel):
    """One question as seen side by side by the user and a party."""
    model_config = ConfigDict(frozen=True)

    topic_id: str
    question_id: str
    description: str
    user_answer: Optional[int]
    party_stance: Optional[int]
    justification: str = ""
    affinity: Optional[float] = None # 0-1, only when both sides have a stance


class ChatMessage(BaseModel):
    sender: Literal["user", "model"]
    text: str


# Custom Error Classes
class InvalidAnswerError(ValueError):
    """Raised for answers to unknown questions or values outside the stance scale."""
    pass

class InvalidWeightError(ValueError):
    """Raised for weights on unknown topics or outside the 0-4 importance scale."""
    pass
