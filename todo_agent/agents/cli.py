"""Command-line interface entry point for the todo agent."""
from __future__ import annotations

import asyncio
from typing import Any, List

from langchain_core.messages import BaseMessage, HumanMessage
from langchain_openai import ChatOpenAI

from ..config import settings
from ..logging_config import setup_logging
from ..storage.factory import build_store
from ..utils.console import (
    INFO_COLOR,
    RESET,
    Spinner,
    clear_screen,
    format_markdown,
    print_error,
    print_tool_activity,
    render_banner,
    user_prompt_label,
)
from .runner import TodoAgent


def build_llm(**overrides: Any) -> ChatOpenAI:
    """Construct the chat model used by the agent."""
    params = {
        "model": settings.model,
        "temperature": settings.temperature,
        "max_tokens": settings.max_tokens,
    }
    if settings.api_key:
        params["api_key"] = settings.api_key
    if settings.base_url:
        params["base_url"] = settings.base_url
    params.update(overrides)
    return ChatOpenAI(**params)


async def chat_turn(agent: TodoAgent, pending: List[BaseMessage]) -> List[BaseMessage]:
    """Run one user turn, echoing tool activity as it happens."""
    messages = agent.seed(pending)
    async with Spinner() as spinner:
        async for node, new_messages in agent.stream(pending):
            messages.extend(new_messages)
            if node == "agent":
                spinner.show_tools(new_messages[-1])
            spinner.clear()
            print_tool_activity(new_messages)
    return messages


async def chat(agent: TodoAgent) -> None:
    """Prompt loop; every turn runs on the same event loop."""
    history: List[BaseMessage] = []

    while True:
        try:
            line = await asyncio.to_thread(input, user_prompt_label())
        except (EOFError, KeyboardInterrupt):
            break

        if not line or line.strip().lower() in {"q", "quit", "exit"}:
            break

        pending = history + [HumanMessage(content=line)]

        try:
            messages = await chat_turn(agent, pending)
        except Exception as error:  # pragma: no cover - runtime guard
            print_error(str(error))
            print()
            continue

        print(format_markdown(str(messages[-1].content)))
        print()
        history = messages


def run_cli() -> None:
    """Run the interactive CLI application."""
    setup_logging()
    clear_screen()
    render_banner("Todo Assistant", f"Storage: {settings.storage_backend}")
    print(f"{INFO_COLOR}Type 'exit' to quit{RESET}\n")

    agent = TodoAgent(build_llm(), build_store(settings), settings)
    try:
        asyncio.run(chat(agent))
    except KeyboardInterrupt:
        pass


def main() -> None:
    run_cli()


if __name__ == "__main__":  # pragma: no cover - CLI execution
    main()
