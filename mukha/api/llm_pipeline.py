"""
Chat generation pipeline.

Builds the knowledge-augmented prompt for one chat turn and calls the hosted
chat model through LangChain's `ChatOpenAI`.

Prompt layout
-------------
1. System message: the fixed assistant instruction followed by the
   knowledge block ("\\n\\nKnowledge Base:\\n- <title>: <content>" per entry).
2. Prior turns: "user" → HumanMessage, "model" → AIMessage.
3. The new user message.

The model call is awaited (`ainvoke`) so a slow provider never blocks the
event loop. Errors are wrapped in `UpstreamFailure`; the chat route turns them
into the fallback reply.
"""

import logging
from typing import Iterable, List, Mapping, Optional

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from mukha.api.errors import UpstreamFailure
from mukha.database.config.config import settings

logger = logging.getLogger(__name__)

EMPTY_REPLY_TEXT = "Sorry, I couldn't generate a response."
"""Recorded when the model answers with no text."""

ERROR_REPLY_TEXT = "An error occurred while processing your request."
"""Returned (not recorded) when the generation call fails."""


def build_knowledge_context(entries: Iterable[Mapping]) -> str:
    """
    Render knowledge entries as a bulleted block for the system prompt.

    Returns
    -------
    str
        "" when there are no entries.
    """
    lines = [f"- {e['title']}: {e['content']}" for e in entries]
    if not lines:
        return ""
    return "\n\nKnowledge Base:\n" + "\n".join(lines)


def build_messages(
    system_instruction: str,
    knowledge: Iterable[Mapping],
    history: Iterable[Mapping],
    message: str,
) -> List[BaseMessage]:
    """Assemble the LangChain message list for one turn."""
    messages: List[BaseMessage] = [SystemMessage(content=system_instruction + build_knowledge_context(knowledge))]
    for turn in history:
        if turn["role"] == "model":
            messages.append(AIMessage(content=turn["text"]))
        else:
            messages.append(HumanMessage(content=turn["text"]))
    messages.append(HumanMessage(content=message))
    return messages


def lc_text_from_content(content) -> str:
    """Normalize LangChain message content to plain text.

    - If string → return as-is.
    - If list of content parts → concatenates only 'text' parts.
    - Else → str(content).
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        return "".join(p.get("text", "") for p in content if isinstance(p, dict) and p.get("type") == "text")
    return str(content)


class ChatGenerator:
    """
    Thin wrapper around the hosted chat model.

    The LangChain client is created on first use so the application can boot
    without an API key; a missing key then surfaces as `UpstreamFailure`.
    """

    def __init__(self, model=None, system_instruction: Optional[str] = None):
        self._model = model
        self.system_instruction = system_instruction or settings.SYSTEM_INSTRUCTION

    def _get_model(self):
        if self._model is None:
            self._model = ChatOpenAI(
                model=settings.OPEN_AI_MODEL,
                api_key=settings.API_KEY,
                temperature=settings.LLM_TEMPERATURE,
                timeout=settings.LLM_TIMEOUT_SECONDS,
                max_retries=settings.LLM_MAX_RETRIES,
            )
        return self._model

    async def generate(self, message: str, history: Iterable[Mapping], knowledge: Iterable[Mapping]) -> str:
        """
        Ask the model for the next reply.

        Parameters
        ----------
        message : str
            The new user message.
        history : iterable of {'role', 'text'}
            Prior turns, oldest first.
        knowledge : iterable of {'title', 'content'}
            Knowledge entries injected into the system prompt.

        Returns
        -------
        str
            Reply text, stripped; may be empty.

        Raises
        ------
        UpstreamFailure
            The client could not be created or the call failed.
        """
        messages = build_messages(self.system_instruction, knowledge, history, message)
        try:
            response = await self._get_model().ainvoke(messages)
        except Exception as e:
            logger.warning("Chat generation failed: %s", e)
            raise UpstreamFailure(str(e)) from e
        return lc_text_from_content(response.content).strip()

    async def shutdown(self) -> None:
        """Close the HTTP clients held by the chat model, if one was created."""
        model, self._model = self._model, None
        if model is None:
            return
        async_client = getattr(model, "root_async_client", None)
        if async_client is not None:
            await async_client.close()
        client = getattr(model, "root_client", None)
        if client is not None:
            client.close()
