from .chat import ChatSession
from .quiz import QuizSession
from .results import ResultsView

__all__ = [
    "ChatSession",
    "QuizSession",
    "ResultsView",
]
