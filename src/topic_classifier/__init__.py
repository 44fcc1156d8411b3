# ABOUTME: Heuristic topic classifier for exam questions (mathematics, history, physics).
# ABOUTME: Re-exports the classifier, topic localization helpers, and question-bank summary.

from .classifier import QuestionClassification, classify_question, classify_questions, resolve_topic
from .translations import TOPIC_CATALOGUE, localize_topic, topic_from_meta
from .summary import summarize_questions

__all__ = [
    "QuestionClassification",
    "classify_question",
    "classify_questions",
    "resolve_topic",
    "TOPIC_CATALOGUE",
    "localize_topic",
    "topic_from_meta",
    "summarize_questions",
]
