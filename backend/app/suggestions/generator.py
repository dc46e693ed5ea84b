"""Activity suggestion generators.

Provides a keyword-matching generator over canned fixture content. It is a
stand-in for a real model: the planner treats its output like any other
externally proposed activity.
"""

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from backend.app.models.activity import ActivitySuggestion, SuggestionResponse

logger = logging.getLogger(__name__)

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"


class SuggestionGenerator(Protocol):
    """Protocol for suggestion generator implementations."""

    async def suggest(self, prompt: str, *, destination: str | None = None) -> SuggestionResponse:
        """Propose candidate activities for a free-text prompt.

        Args:
            prompt: User request, e.g. "plan my day"
            destination: Plan destination, used in the reply message

        Returns:
            SuggestionResponse with a message and partial activities
        """
        ...


class KeywordSuggestionGenerator:
    """Deterministic generator keyed on substrings of the prompt.

    Rules are tried in fixture order; the first rule with a keyword contained
    in the lowercased prompt wins, otherwise the default reply is used.
    """

    def __init__(self, fixtures_path: Path | None = None) -> None:
        path = fixtures_path or FIXTURES_DIR / "suggestions.json"
        with open(path) as f:
            data = json.load(f)

        self._rules: list[dict[str, Any]] = data["rules"]
        self._default: dict[str, Any] = data["default"]

    def _match(self, prompt: str) -> dict[str, Any]:
        lowered = prompt.lower()
        for rule in self._rules:
            if any(keyword in lowered for keyword in rule["keywords"]):
                return rule
        return self._default

    async def suggest(self, prompt: str, *, destination: str | None = None) -> SuggestionResponse:
        """Return the canned suggestions of the first matching rule."""
        rule = self._match(prompt)
        logger.info(f"Suggestion rule matched: {rule['name']}")

        message = rule["message"].format(
            destination=destination or "your trip",
            where=f"in {destination}" if destination else "nearby",
        )
        suggestions = [ActivitySuggestion.model_validate(s) for s in rule["suggestions"]]

        return SuggestionResponse(message=message, suggestions=suggestions)
