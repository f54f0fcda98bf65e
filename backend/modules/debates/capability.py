"""
Capability providers: the orchestrator's uniform view of an LLM backend.

A capability takes a role-tagged message sequence and an optional tool set
and returns generated text. Tool calls requested by the model are executed
inside generate(), so a single call may span several model round-trips.
"""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any, Optional, Protocol, runtime_checkable

from langchain_core.messages import BaseMessage, ToolMessage
from langchain_core.tools import BaseTool

from providers.base import LLMProvider, ModelConfig, ProviderId
from providers.factory import get_model_config, get_providers
from shared.config import Settings, get_settings

from .exceptions import ProviderError

logger = logging.getLogger(__name__)


@runtime_checkable
class ICapabilityProvider(Protocol):
    """Interface every debate agent backend implements."""

    async def generate(
        self,
        messages: Sequence[BaseMessage],
        tools: Optional[Sequence[BaseTool]] = None,
    ) -> str:
        """
        Generate the next message.

        Raises:
            ProviderError: On empty output, provider rejection, timeout or
                network failure
        """
        ...


def message_text(message: Any) -> str:
    """Extract plain text from a chat model reply.

    Providers return either a string or a list of content blocks.
    """
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


class ChatCapability(ICapabilityProvider):
    """
    Capability backed by a LangChain chat model.

    Runs a bounded tool loop: at most ``max_steps`` model calls; tool calls
    in a step run one after another and their outputs are fed back before
    the next step. Tool calls requested on the final step are not run.
    """

    def __init__(
        self,
        provider_id: ProviderId,
        provider: LLMProvider,
        config: ModelConfig,
        max_steps: int = 3,
        timeout: float = 120.0,
    ):
        self.provider_id = provider_id
        self._provider = provider
        self._config = config
        self._max_steps = max(1, max_steps)
        self._timeout = timeout

    async def generate(
        self,
        messages: Sequence[BaseMessage],
        tools: Optional[Sequence[BaseTool]] = None,
    ) -> str:
        name = self.provider_id.value
        try:
            llm = self._provider.get_llm(self._config)
        except ValueError as e:
            raise ProviderError(name, str(e)) from e

        runnable = self._provider.bind_tools(llm, tools) if tools else llm
        tool_map = {tool.name: tool for tool in tools or []}
        history: list[BaseMessage] = list(messages)

        reply: Any = None
        for step in range(self._max_steps):
            reply = await self._invoke(runnable, history)
            tool_calls = getattr(reply, "tool_calls", None) or []
            if not tool_calls or step == self._max_steps - 1:
                break

            history.append(reply)
            for call in tool_calls:
                tool = tool_map.get(call["name"])
                if tool is None:
                    raise ProviderError(name, f"requested unknown tool '{call['name']}'")
                try:
                    output = await tool.ainvoke(call["args"])
                except Exception as e:
                    raise ProviderError(
                        name,
                        f"tool '{call['name']}' failed: {e}",
                        original_error=type(e).__name__,
                    ) from e
                history.append(ToolMessage(content=str(output), tool_call_id=call["id"]))

        text = message_text(reply).strip()
        if not text:
            raise ProviderError(name, f"empty response from LLM: {name}")

        logger.info(f"{name}: {text[:200]}")
        return text

    async def _invoke(self, runnable: Any, history: list[BaseMessage]) -> Any:
        name = self.provider_id.value
        try:
            return await asyncio.wait_for(runnable.ainvoke(history), timeout=self._timeout)
        except asyncio.TimeoutError as e:
            raise ProviderError(name, f"timed out after {self._timeout:g}s") from e
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(name, str(e) or type(e).__name__, original_error=type(e).__name__) from e


def get_capabilities(settings: Settings | None = None) -> dict[ProviderId, ICapabilityProvider]:
    """
    Build the capability lookup table, one entry per provider identity.

    Clients are created lazily at call time, so providers without an
    API key are still listed; calling them fails with ProviderError.
    """
    settings = settings or get_settings()
    providers = get_providers()
    return {
        provider_id: ChatCapability(
            provider_id=provider_id,
            provider=provider,
            config=get_model_config(provider_id, settings),
            max_steps=settings.debate_max_tool_steps,
            timeout=settings.debate_provider_timeout,
        )
        for provider_id, provider in providers.items()
    }
