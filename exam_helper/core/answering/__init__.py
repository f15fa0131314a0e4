"""
Answer synthesis.

Exports: AnswerSynthesizer, StudyTask and the study prompts
"""

from .answer_synthesizer import AnswerSynthesizer
from .prompts import ANSWER_PROMPT, IMPORTANT_QUESTIONS_TASK, SUMMARY_TASK, StudyTask

__all__ = [
    "AnswerSynthesizer",
    "ANSWER_PROMPT",
    "IMPORTANT_QUESTIONS_TASK",
    "SUMMARY_TASK",
    "StudyTask",
]
