"""
Study Aid Generator - Turns a video title and the user's notes into a study plan, quiz or refined notes.
"""

import logging
from typing import Dict, List, Optional

from ..core.errors import EnrichmentFailure
from ..llm.base import LLMProvider, LLMMessage
from ..models.enrichment import StudyAidKind

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are the AI Studio of FocusFlow, a distraction-free study player for YouTube videos.

You help a learner get more out of the video they are watching. You only know the
video's title and the notes the learner has written so far; do not invent details
about the video that neither of them supports.

Guidelines:
- Be concise and well structured; use Markdown headings and lists
- Respond in the same language as the learner's notes (English if there are none)
- Never lecture about focus or productivity unless asked
"""

TASK_PROMPTS: Dict[StudyAidKind, str] = {
    StudyAidKind.PLAN: """Create a study plan for this video.

Include:
1. Learning goals (3-5 bullet points)
2. A step-by-step plan for watching and practicing, with rough time estimates
3. Follow-up topics to explore afterwards
""",
    StudyAidKind.QUIZ: """Write a short quiz to check understanding of this video.

Include:
1. 5 multiple-choice questions with options A-D
2. An answer key at the end with a one-line explanation per answer
""",
    StudyAidKind.SUMMARY: """Refine the learner's notes into a clean summary.

Include:
1. Key points, grouped by topic
2. Definitions of important terms
3. Open questions the notes leave unanswered
If the notes are empty, outline what a good set of notes for this video should cover.
""",
}


class StudyAidGenerator:
    """Generates study aids through the configured LLM provider."""

    def __init__(self, llm_provider: Optional[LLMProvider] = None, temperature: float = 0.7):
        """
        Initialize the generator.

        Args:
            llm_provider: Provider to call; None means AI is not configured
            temperature: Sampling temperature for every request
        """
        self._llm_provider = llm_provider
        self.temperature = temperature

    @property
    def configured(self) -> bool:
        return self._llm_provider is not None

    def build_messages(self, kind: StudyAidKind, title: str, notes: str) -> List[LLMMessage]:
        """Assemble the prompt for one request."""
        user_prompt = (
            f"{TASK_PROMPTS[kind]}\n"
            f"## Video\n{title}\n\n"
            f"## Learner's notes\n{notes.strip() or '(no notes yet)'}\n"
        )
        return [
            LLMMessage.text("system", SYSTEM_PROMPT),
            LLMMessage.text("user", user_prompt),
        ]

    async def generate(self, kind: StudyAidKind, title: str, notes: str = "") -> str:
        """
        Generate one study aid.

        Args:
            kind: Plan, quiz or summary
            title: Video title (or its ID when untitled)
            notes: The learner's current notes

        Returns:
            Generated text

        Raises:
            EnrichmentFailure: If no provider is configured, the call fails or the answer is empty
        """
        if self._llm_provider is None:
            raise EnrichmentFailure(
                "AI Studio is not configured. Set LLM_API_KEY and LLM_PROVIDER to enable study aids."
            )

        kind = StudyAidKind(kind)
        messages = self.build_messages(kind, title, notes)

        try:
            response = await self._llm_provider.chat_completion(messages, temperature=self.temperature)
        except Exception as e:
            logger.error(
                f"Study aid generation failed: {str(e)}",
                extra={"extra_fields": {"kind": kind.value, "error": str(e)}}
            )
            raise EnrichmentFailure(f"Could not generate the {kind.value}: {e}") from e

        content = (response.content or "").strip()
        if not content:
            raise EnrichmentFailure(f"The AI returned an empty {kind.value}. Please try again.")

        logger.debug(f"Generated {kind.value}: {len(content)} chars")
        return content
