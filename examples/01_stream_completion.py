"""
Streaming Completion Example
============================

This example sends one request to DeepSeek and prints the answer while it
streams in, then lists any tool calls the model made.

Prerequisites:
- A DeepSeek API key in DEEPSEEK_API_KEY
- seekbridge installed: pip install seekbridge

Usage:
    python examples/01_stream_completion.py
"""

import asyncio
import os

from seekbridge.llm.client import (
    CompletionItem,
    CompletionOptions,
    CompletionRequest,
    Content,
    Message,
    ToolUseDefinition,
)
from seekbridge.llm.deepseek import DeepSeekClient
from seekbridge.llm.progress import ProgressRouter


async def main():
    """Stream one completion with a weather tool available."""

    # 1. Route progress events for our token to a printer
    router = ProgressRouter()
    router.register(
        "demo",
        lambda progress: print(progress.item.content.text, end="", flush=True)
        if progress.item.content
        else None,
    )

    # 2. Describe the request in provider-agnostic terms
    request = CompletionRequest(
        model="deepseek-chat",
        agent="example",
        system_prompt="You are a concise assistant.",
        input=[
            Message(
                role="user",
                items=[
                    CompletionItem(
                        content=Content(type="text", text="What's the weather in Lisbon?")
                    )
                ],
            )
        ],
        tools=[
            ToolUseDefinition(
                name="get_weather",
                description="Current weather for a city",
                parameters={
                    "type": "object",
                    "properties": {"city": {"type": "string"}},
                    "required": ["city"],
                },
            )
        ],
        tool_choice="auto",
    )

    # 3. Run it
    async with DeepSeekClient(api_key=os.environ["DEEPSEEK_API_KEY"], progress=router) as client:
        response = await client.complete(request, CompletionOptions(progress_token="demo"))

    print()
    for item in response.output.items:
        if item.tool_call:
            print(f"🔧 {item.tool_call.name}({item.tool_call.arguments})")


if __name__ == "__main__":
    asyncio.run(main())
