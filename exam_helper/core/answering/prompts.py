"""
Study prompt templates.

Defines the system instructions and fixed inputs for the three study
operations, and the chat template that places retrieved context in the
system message.

Dependencies: langchain_core.prompts
System role: Prompt templates for answer synthesis
"""

from dataclasses import dataclass

from langchain_core.prompts import ChatPromptTemplate

STUDY_ASSISTANT_PROMPT = "You are a study assistant. Use the provided context only."

ANSWER_PROMPT = (
    "Answer using only the context. "
    "If the answer is not in the context, say you do not know."
)

CONTEXT_INSTRUCTIONS = "Use the following context to answer. Read it carefully."


@dataclass(frozen=True)
class StudyTask:
    """Fixed instruction pair for a document-wide study operation."""

    name: str
    system_prompt: str
    user_input: str


SUMMARY_TASK = StudyTask(
    name="summary",
    system_prompt=STUDY_ASSISTANT_PROMPT,
    user_input="Summarize the document for exam study in 6-10 bullet points.",
)

IMPORTANT_QUESTIONS_TASK = StudyTask(
    name="important_questions",
    system_prompt=STUDY_ASSISTANT_PROMPT,
    user_input="Create 8-12 important exam questions. Output a numbered list.",
)


def build_answer_prompt(system_prompt: str) -> ChatPromptTemplate:
    """
    Build the chat prompt for one synthesis call.

    The system prompt is inserted as a literal message part so braces in
    it are never read as template variables; only {context} and {input}
    are filled in.

    Args:
        system_prompt: Operation-specific instruction

    Returns:
        ChatPromptTemplate: Template expecting "context" and "input"
    """
    escaped = system_prompt.replace("{", "{{").replace("}", "}}")
    return ChatPromptTemplate.from_messages([
        ("system", escaped + "\n\n" + CONTEXT_INSTRUCTIONS + "\n\nContext:\n{context}"),
        ("human", "{input}"),
    ])
