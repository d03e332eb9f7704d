# tests/unit/analysis/test_risk_analyzer.py
"""Tests for analysis/risk_analyzer.py."""

from __future__ import annotations

import pytest

from creditai.analysis.risk_analyzer import (
    RISK_ANALYST_SYSTEM,
    RiskAnalyzer,
    build_analysis_prompt,
)
from creditai.core.errors import TextGenerationError


class TestBuildAnalysisPrompt:
    def test_includes_profile_fields(self, make_profile):
        profile = make_profile("p1", score=540, name="Marina Costa")
        prompt = build_analysis_prompt(profile, "  Should we raise the credit limit?  ")
        assert "- Name: Marina Costa" in prompt
        assert "- Credit score: 540" in prompt
        assert profile.behavior_text in prompt
        assert "Should we raise the credit limit?\n" in prompt
        assert "Churn risk" in prompt


class TestRiskAnalyzer:
    @pytest.mark.asyncio
    async def test_returns_stripped_analysis(self, make_profile, mock_llm_client, mock_llm_response):
        mock_llm_client.complete.return_value = mock_llm_response.model_copy(
            update={"content": "  Credit risk is Low.  \n"}
        )
        analyzer = RiskAnalyzer(mock_llm_client, max_tokens=512, temperature=0.1)

        result = await analyzer.analyze(make_profile("p1"), "Risk?")

        assert result == "Credit risk is Low."
        kwargs = mock_llm_client.complete.call_args.kwargs
        assert kwargs["system"] == RISK_ANALYST_SYSTEM
        assert kwargs["max_tokens"] == 512
        assert kwargs["temperature"] == 0.1

    @pytest.mark.asyncio
    async def test_blank_question(self, make_profile, mock_llm_client):
        with pytest.raises(ValueError, match="Question"):
            await RiskAnalyzer(mock_llm_client).analyze(make_profile("p1"), "  ")
        mock_llm_client.complete.assert_not_called()

    @pytest.mark.asyncio
    async def test_llm_failure_wrapped(self, make_profile, mock_llm_client):
        mock_llm_client.complete.side_effect = ConnectionError("reset")
        with pytest.raises(TextGenerationError, match="reset"):
            await RiskAnalyzer(mock_llm_client).analyze(make_profile("p1"), "Risk?")

    @pytest.mark.asyncio
    async def test_empty_output(self, make_profile, mock_llm_client, mock_llm_response):
        mock_llm_client.complete.return_value = mock_llm_response.model_copy(
            update={"content": ""}
        )
        with pytest.raises(TextGenerationError, match="empty"):
            await RiskAnalyzer(mock_llm_client).analyze(make_profile("p1"), "Risk?")
