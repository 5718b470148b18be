"""
Advisory text generation.

Thin wrapper over the Anthropic messages API used for personalized load
warnings, run feedback and AI-built training plans. Everything here is
enrichment, not critical path:

- No API key configured -> every call returns None without a request
- Hard client timeout, no retries
- Any failure -> None; callers keep their deterministic fallback
"""
import json
import logging
import re
from typing import Any, Dict, Optional

from anthropic import Anthropic

from forge.core.config import settings
from forge.core.constants import SESSION_TYPES
from forge.core.errors import CollaboratorUnavailable

logger = logging.getLogger(__name__)

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")


class AdvisoryTextGenerator:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, timeout: Optional[float] = None, client: Any = None):
        self.api_key = api_key if api_key is not None else settings.anthropic_api_key
        self.model = model or settings.advisory_model
        self.timeout = timeout if timeout is not None else settings.advisory_timeout_seconds
        self._client = client

    @property
    def available(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def _get_client(self):
        if self._client is None:
            self._client = Anthropic(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    def _complete(self, prompt: str, max_tokens: int) -> str:
        """Single-shot completion; raises CollaboratorUnavailable on any failure."""
        try:
            response = self._get_client().messages.create(
                model=self.model,
                max_tokens=max_tokens,
                messages=[{"role": "user", "content": prompt}],
            )
            text = response.content[0].text.strip()
        except Exception as exc:
            raise CollaboratorUnavailable(str(exc)) from exc
        if not text:
            raise CollaboratorUnavailable("empty completion")
        return text

    def generate(self, context: Dict[str, Any]) -> Optional[str]:
        """Personalized overtraining warning for a load snapshot, or None."""
        if not self.available:
            return None
        prompt = (
            "You are a running coach. In 2 sentences, warn this athlete about their "
            "training load and tell them what to do next. No headers, no bullet points.\n"
            f"- Load status: {context.get('load_status')}\n"
            f"- Miles this week: {context.get('this_week_miles')}\n"
            f"- Miles last week: {context.get('last_week_miles')}\n"
            f"- Week-over-week change: {context.get('increase_percent')}%\n"
            f"- Consecutive hard runs (effort >= 7): {context.get('max_hard_streak')}\n"
            f"- Baseline advice: {context.get('recommendation')}"
        )
        try:
            return self._complete(prompt, max_tokens=150)
        except CollaboratorUnavailable as exc:
            logger.warning("Advisory text unavailable: %s", exc)
            return None

    def generate_run_feedback(self, run: Dict[str, Any]) -> Optional[str]:
        """2-3 sentences of coaching feedback on a logged run, or None."""
        if not self.available:
            return None
        prompt = (
            "You are a calm, analytical running coach. Give 2-3 sentences of feedback "
            "on this run. Be specific to the data. Keep it under 60 words.\n"
            f"- Type: {run.get('type')}\n"
            f"- Distance: {run.get('distance_miles')} miles\n"
            f"- Duration: {run.get('duration')} ({run.get('pace')})\n"
            f"- Perceived effort: {run.get('perceived_effort')}/10\n"
            f"- Notes from athlete: {run.get('notes') or 'none'}"
        )
        try:
            return self._complete(prompt, max_tokens=150)
        except CollaboratorUnavailable as exc:
            logger.warning("Run feedback unavailable: %s", exc)
            return None

    def generate_training_plan(self, profile: Dict[str, Any]) -> Optional[dict]:
        """A 4-week plan as a dict with a `weeks` list, or None."""
        if not self.available:
            return None
        prompt = (
            "You are an expert running coach. Create a 4-week training plan for this athlete:\n"
            f"- Current weekly miles: {profile.get('weekly_miles')}\n"
            f"- Goal: {profile.get('goal') or 'building fitness'}\n"
            f"- Run days per week: {profile.get('run_days_per_week') or 4}\n"
            f"- Lift days per week: {profile.get('lift_days_per_week') or 0}\n"
            f"- Injury notes: {profile.get('injury_notes') or 'none'}\n\n"
            "Return ONLY valid JSON, no other text, shaped as "
            '{"weeks": [{"week": 1, "theme": "...", "total_miles": 0, "days": ['
            '{"day": "Mon", "type": "easy", "distance_miles": 0, "duration_min": 0, '
            '"description": "...", "rest": false}, ... 7 days Mon..Sun]}]}\n'
            f"Types can be: {', '.join(SESSION_TYPES)}. "
            "Increase mileage ~10% per week max. Week 4 should be a recovery week (reduce ~20%)."
        )
        try:
            text = self._complete(prompt, max_tokens=2000)
        except CollaboratorUnavailable as exc:
            logger.warning("AI plan generation unavailable: %s", exc)
            return None
        match = _JSON_OBJECT.search(text)
        if not match:
            logger.warning("AI plan response had no JSON object")
            return None
        try:
            return json.loads(match.group(0))
        except ValueError as exc:
            logger.warning("AI plan JSON parse failed: %s", exc)
            return None


advisor = AdvisoryTextGenerator()


def get_advisor() -> AdvisoryTextGenerator:
    # FastAPI dependency; overridden in tests
    return advisor
