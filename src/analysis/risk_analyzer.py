# src/analysis/risk_analyzer.py
"""Credit-committee style risk analysis of one profile.

Builds the analyst prompt and delegates the generation to an LLM client;
the analysis text itself is whatever the model returns.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from creditai.core.errors import TextGenerationError
from creditai.llm.models import Message

if TYPE_CHECKING:
    from creditai.core.models import Profile
    from creditai.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

RISK_ANALYST_SYSTEM = "You are a senior bank credit risk specialist."

_ANALYSIS_TEMPLATE = """\
Analyze the customer below with technical rigor, as if writing an opinion for a credit committee.

Customer data:
- Name: {name}
- Credit score: {score}
- Behavioral history: {history}

Question:
{question}

Mandatory instructions:

1. Classify objectively:
   - Credit risk: Low, Medium or High
   - Churn risk: Low, Medium or High

2. Justify each classification with evidence from the history.

3. Point out relevant warning signs.

4. Recommend one practical action for the bank.

Rules:
- Be technical, direct and professional.
- Do not invent information.
- Rely only on the data provided.
- Answer in plain text only, in simple paragraphs, without markdown symbols or lists.
- Do not be generic."""


def build_analysis_prompt(profile: Profile, question: str) -> str:
    """Render the analyst prompt for a profile and a question."""
    return _ANALYSIS_TEMPLATE.format(
        name=profile.display_name,
        score=profile.numeric_score,
        history=profile.behavior_text,
        question=question.strip(),
    )


class RiskAnalyzer:
    """Ask the LLM for a credit and churn risk opinion on a profile."""

    def __init__(
        self,
        llm_client: BaseLLMClient,
        max_tokens: int = 1024,
        temperature: float = 0.2,
    ) -> None:
        self._llm = llm_client
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def analyze(self, profile: Profile, question: str) -> str:
        """Return the model's analysis text.

        Raises:
            ValueError: If the question is blank.
            TextGenerationError: If the LLM call fails or returns nothing.
        """
        if not question or not question.strip():
            raise ValueError("Question must not be empty")

        prompt = build_analysis_prompt(profile, question)
        try:
            response = await self._llm.complete(
                messages=[Message(role="user", content=prompt)],
                system=RISK_ANALYST_SYSTEM,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except Exception as e:
            raise TextGenerationError(
                f"Risk analysis failed ({self._llm.provider_name}): {e}"
            ) from e

        analysis = response.content.strip()
        if not analysis:
            raise TextGenerationError("LLM returned an empty risk analysis")

        logger.info(
            "Risk analysis for %s: %d chars in %d ms",
            profile.identity, len(analysis), response.latency_ms,
        )
        return analysis
