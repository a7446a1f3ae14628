"""
Unit tests for the study-aid generator.
"""

import pytest
from unittest.mock import AsyncMock

from focusflow.core.errors import EnrichmentFailure
from focusflow.llm.base import LLMProvider, LLMResponse
from focusflow.models.enrichment import StudyAidKind
from focusflow.services.study_aid import StudyAidGenerator, SYSTEM_PROMPT


class TestBuildMessages:
    """Tests for prompt assembly."""

    def test_system_and_user_messages(self):
        generator = StudyAidGenerator(None)
        messages = generator.build_messages(StudyAidKind.QUIZ, "Linear Algebra 101", "vectors, spans")
        assert [m.role for m in messages] == ["system", "user"]
        assert messages[0].content == SYSTEM_PROMPT
        assert "Linear Algebra 101" in messages[1].content
        assert "vectors, spans" in messages[1].content
        assert "quiz" in messages[1].content.lower()

    def test_empty_notes_placeholder(self):
        generator = StudyAidGenerator(None)
        messages = generator.build_messages(StudyAidKind.SUMMARY, "Title", "   ")
        assert "(no notes yet)" in messages[1].content

    @pytest.mark.parametrize("kind", list(StudyAidKind))
    def test_every_kind_has_a_prompt(self, kind):
        generator = StudyAidGenerator(None)
        prompts = {generator.build_messages(k, "t", "n")[1].content for k in StudyAidKind}
        assert len(prompts) == len(StudyAidKind)
        assert generator.build_messages(kind, "t", "n")[1].content


class TestGenerate:
    """Tests for generate."""

    @pytest.mark.asyncio
    async def test_returns_stripped_content(self):
        provider = AsyncMock(spec=LLMProvider)
        provider.chat_completion.return_value = LLMResponse(content="  # Plan\n1. Watch  \n", model="test")
        generator = StudyAidGenerator(provider, temperature=0.3)

        result = await generator.generate("plan", "Title", "notes")

        assert result == "# Plan\n1. Watch"
        call_args = provider.chat_completion.call_args
        assert call_args.kwargs["temperature"] == 0.3
        assert len(call_args.args[0]) == 2

    @pytest.mark.asyncio
    async def test_not_configured(self):
        generator = StudyAidGenerator(None)
        assert not generator.configured
        with pytest.raises(EnrichmentFailure, match="not configured"):
            await generator.generate(StudyAidKind.PLAN, "Title")

    @pytest.mark.asyncio
    async def test_provider_error(self):
        provider = AsyncMock(spec=LLMProvider)
        provider.chat_completion.side_effect = Exception("API error")
        generator = StudyAidGenerator(provider)
        with pytest.raises(EnrichmentFailure, match="API error"):
            await generator.generate(StudyAidKind.QUIZ, "Title")

    @pytest.mark.asyncio
    async def test_empty_response(self):
        provider = AsyncMock(spec=LLMProvider)
        provider.chat_completion.return_value = LLMResponse(content="   ", model="test")
        generator = StudyAidGenerator(provider)
        with pytest.raises(EnrichmentFailure, match="empty"):
            await generator.generate(StudyAidKind.SUMMARY, "Title")
