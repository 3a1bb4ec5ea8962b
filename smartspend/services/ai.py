# smartspend/services/ai.py
# Remote classifier: OpenAI chat completions. One attempt per call, errors propagate
# to the caller, which decides the fallback.

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from openai import AsyncOpenAI

from smartspend.models.records import Category

log = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful assistant that categorizes expenses accurately and consistently."

CATEGORIZE_PROMPT = """You are an AI assistant that categorizes expenses. Given an expense name and a list of available categories, choose the most appropriate category.

Expense: "{expense}"

Available categories: {categories}

Rules:
1. Choose the MOST appropriate category from the list above
2. Respond with ONLY the category name (without emoji)
3. Be consistent with similar expenses
4. If unsure, choose the closest match

Category:"""

EMOJI_PROMPT = """Suggest an appropriate emoji for the expense category: "{category}"

Rules:
1. Respond with ONLY the emoji character
2. Choose the most relevant and commonly used emoji
3. Avoid complex or uncommon emojis

Emoji:"""


class ExpenseClassifier(Protocol):
    async def classify_expense(self, expense_name: str, categories: Sequence[Category]) -> str: ...

    async def suggest_emoji(self, category_name: str) -> str: ...


def build_category_list(categories: Sequence[Category]) -> str:
    return ", ".join(c.label for c in categories)


class OpenAIClassifier:
    """Talks to the chat completions API. No retries, no timeouts of its own."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini",
        client: Optional[AsyncOpenAI] = None,
    ) -> None:
        self.model = model
        self.client = client or AsyncOpenAI(api_key=api_key, max_retries=0)

    async def _complete(self, messages: list[dict], max_tokens: int) -> str:
        completion = await self.client.chat.completions.create(
            model=self.model,
            messages=messages,
            max_tokens=max_tokens,
            temperature=0.1,  # low temperature -> repeatable answers
        )
        content = completion.choices[0].message.content or ""
        return content.strip()

    async def classify_expense(self, expense_name: str, categories: Sequence[Category]) -> str:
        prompt = CATEGORIZE_PROMPT.format(
            expense=expense_name,
            categories=build_category_list(categories),
        )
        return await self._complete(
            [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            max_tokens=50,
        )

    async def suggest_emoji(self, category_name: str) -> str:
        prompt = EMOJI_PROMPT.format(category=category_name)
        return await self._complete([{"role": "user", "content": prompt}], max_tokens=10)
