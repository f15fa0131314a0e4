"""
Answer synthesis with Google Gemini.

Fills the answer prompt with the assembled context and the user input and
returns the model's text. The call carries a timeout and transient failures are retried;
a surviving failure is raised as GenerationError.

Dependencies: langchain_google_genai, langchain_core, tenacity
System role: Generative model adapter
"""

import asyncio
import logging

from dotenv import load_dotenv
from langchain_core.language_models.chat_models import BaseChatModel
from exam_helper.configs.providers import ProviderSettings
from exam_helper.core.answering.prompts import build_answer_prompt
from exam_helper.core.exceptions import ConfigError, GenerationError
from exam_helper.core.retry_policy import provider_retrying

load_dotenv()
logger = logging.getLogger(__name__)


def create_google_chat_model(settings: ProviderSettings) -> BaseChatModel:
    """
    Build the Gemini chat model.

    Args:
        settings: Provider settings with credentials, model id and temperature

    Returns:
        BaseChatModel: ChatGoogleGenerativeAI instance

    Raises:
        ConfigError: When no API key is configured
    """
    if settings.api_key is None:
        raise ConfigError("GOOGLE_API_KEY is not set.", setting="api_key")

    from langchain_google_genai import ChatGoogleGenerativeAI

    return ChatGoogleGenerativeAI(
        model=settings.chat_model,
        temperature=settings.temperature,
        google_api_key=settings.api_key,
    )


def _message_text(content) -> str:
    """Flatten string or list message content to text."""
    if isinstance(content, list):
        return "".join(
            item if isinstance(item, str) else (item.get("text", "") if isinstance(item, dict) else str(item))
            for item in content
        )
    return str(content)


class AnswerSynthesizer:
    """Generate a grounded answer from instructions, context and input."""

    def __init__(
        self,
        model: BaseChatModel | None = None,
        settings: ProviderSettings | None = None,
    ) -> None:
        """
        Initialize synthesizer.

        The Gemini model is built on first use.

        Args:
            model: LangChain chat model (Gemini built from settings if None)
            settings: Provider settings (defaults loaded from environment)
        """
        self._settings = settings or ProviderSettings()
        self._model = model

    @property
    def model(self) -> BaseChatModel:
        """Chat model, built from settings on first access."""
        if self._model is None:
            self._model = create_google_chat_model(self._settings)
        return self._model

    async def synthesize(self, system_prompt: str, context: str, user_input: str) -> str:
        """
        Produce the answer text.

        Args:
            system_prompt: Operation-specific instruction
            context: Delimited passages in rank order
            user_input: Question or fixed task input

        Returns:
            str: Answer text

        Raises:
            ConfigError: When the model cannot be built
            GenerationError: When the model call still fails after retries
        """
        settings = self._settings
        chain = build_answer_prompt(system_prompt) | self.model
        inputs = {"context": context, "input": user_input}

        try:
            async for attempt in provider_retrying(settings, logger, "synthesize"):
                with attempt:
                    message = await asyncio.wait_for(
                        chain.ainvoke(inputs),
                        timeout=settings.request_timeout_seconds,
                    )
        except asyncio.TimeoutError as e:
            logger.error(f"{__name__}:synthesize - Timed out after {settings.max_attempts} attempts")
            raise GenerationError(
                f"Answer generation timed out after {settings.request_timeout_seconds}s",
                model=settings.chat_model,
            ) from e
        except Exception as e:
            logger.error(f"{__name__}:synthesize - FAILED: {type(e).__name__}: {e}")
            raise GenerationError(f"Answer generation failed: {e}", model=settings.chat_model) from e

        answer = _message_text(getattr(message, "content", message))
        logger.info(f"{__name__}:synthesize - OK answer_len={len(answer)}, context_len={len(context)}")
        return answer
