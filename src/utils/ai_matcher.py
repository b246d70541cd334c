"""
LLM-assisted artwork disambiguation.

Asks Claude to pick the artwork that matches a ROM among a set of candidate
filenames, and only accepts answers that are one of those candidates.
"""

import json
import logging
import os
from typing import Optional, Sequence

import anthropic

from constants import AI_MATCH_RETRIES, DEFAULT_LLM_MODEL, DEFAULT_REGIONS, LLM_MAX_TOKENS
from core.models import MatchKind, RunStatistics

logger = logging.getLogger(__name__)


class AIMatcher:
    """
    LLM-powered artwork matcher using Claude API.

    Transport failures end the attempt immediately; answers naming a file
    that is not a candidate are retried a bounded number of times.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = DEFAULT_LLM_MODEL,
        regions: Optional[Sequence[str]] = None,
        client: Optional[anthropic.Anthropic] = None,
    ):
        """
        Initialize AI matcher.

        Args:
            api_key: Anthropic API key (falls back to ANTHROPIC_API_KEY env var)
            model: Claude model to use, forwarded verbatim
            regions: Region preference order written into the prompt
            client: Preconfigured Anthropic client (skips key lookup)
        """
        self.model = model
        self.regions = list(regions) if regions else list(DEFAULT_REGIONS)

        if client is not None:
            self.client = client
            return

        api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            logger.warning(
                "No Anthropic API key found. AI matching will be disabled. "
                "To enable, either:\n"
                "  1. Set ANTHROPIC_API_KEY environment variable\n"
                "  2. Set anthropicApiKey in the config file\n"
                "  3. Use --anthropic-api-key flag"
            )
            self.client = None
        else:
            self.client = anthropic.Anthropic(api_key=api_key)

    @property
    def enabled(self) -> bool:
        """Whether an Anthropic client is available."""
        return self.client is not None

    def build_prompt(self, name: str, candidates: Sequence[str]) -> str:
        """
        Build the disambiguation prompt.

        Args:
            name: ROM name as found on disk
            candidates: Candidate artwork filenames, listed verbatim

        Returns:
            Prompt string
        """
        candidate_list = "\n".join(candidates)
        regions = ", ".join(self.regions)

        return f"""## Candidates
{candidate_list}

## Instructions
Find the best matching image for the ROM name "{name}" in the listed candidates.
If a direct match isn't available, use the closest match trying to translate the name in english.
For example, "Pokemon - Version Or (France) (SGB Enhanced)" should match "Pokemon - Gold Version (USA, Europe) (SGB Enhanced) (GB Compatible).png".
Game sequels MUST NOT match, "Sonic" is NOT the same as "Sonic 2".
When multiple regions are available, prefer the one that matches the region of the ROM if possible.
If the region is not available, use this order of preference: {regions}.
If no close match is found, return null.

## Output
Answer with JSON using the following format:
{{
  "bestMatch": "<best matching candidate>"
}}"""

    def _parse_json_response(self, response_text: str) -> str:
        """Parse JSON from LLM response, handling markdown code blocks."""
        response_text = response_text.strip()
        if response_text.startswith("```json"):
            response_text = response_text[7:]
        if response_text.startswith("```"):
            response_text = response_text[3:]
        if response_text.endswith("```"):
            response_text = response_text[:-3]
        return response_text.strip()

    def get_completion(self, prompt: str) -> Optional[dict]:
        """
        Send a prompt and decode the JSON answer.

        Args:
            prompt: Prompt string

        Returns:
            Decoded JSON object, or None if the answer is unusable

        Raises:
            anthropic.APIError: If the API call itself fails
        """
        message = self.client.messages.create(
            model=self.model,
            max_tokens=LLM_MAX_TOKENS,
            messages=[{"role": "user", "content": prompt}],
        )

        if not message.content:
            return None

        # Tool use and thinking blocks carry no text
        text = getattr(message.content[0], "text", None)
        if not isinstance(text, str):
            logger.debug(f"Ignoring non-text AI response block: {getattr(message.content[0], 'type', None)}")
            return None

        try:
            response = json.loads(self._parse_json_response(text))
        except json.JSONDecodeError as e:
            logger.debug(f"Failed to parse AI response as JSON: {e}")
            return None

        return response if isinstance(response, dict) else None

    def resolve_with_assistant(
        self,
        search: str,
        name: str,
        candidates: Sequence[str],
        retries: int = AI_MATCH_RETRIES,
        stats: Optional[RunStatistics] = None,
    ) -> Optional[str]:
        """
        Ask the assistant for the candidate matching a ROM.

        Args:
            search: Search term that produced the candidates
            name: ROM name as found on disk
            candidates: Candidate artwork filenames
            retries: Extra attempts allowed after an answer outside the candidates
            stats: Run statistics receiving the AI match count

        Returns:
            The chosen candidate, or None when the assistant has no valid answer
        """
        if not self.enabled or not candidates:
            return None

        prompt = self.build_prompt(name, candidates)
        attempts_left = retries + 1

        while attempts_left > 0:
            attempts_left -= 1

            try:
                response = self.get_completion(prompt)
            except anthropic.APIError as e:
                logger.warning(f"AI matching unavailable for '{name}': {e}")
                return None

            logger.debug(f"AI response: {response}")
            best_match = response.get("bestMatch") if response else None
            if not best_match:
                logger.debug(f"AI failed to find a match for '{name}' (searched: '{search}')")
                return None

            if best_match not in candidates:
                logger.debug(
                    f"AI found a match for '{name}' (searched: '{search}'), "
                    f"but it's not a candidate: '{best_match}'"
                )
                if attempts_left > 0:
                    logger.debug(f"Retrying AI match for '{name}' (Tries left: {attempts_left})")
                continue

            logger.info(f"AI match for '{name}' (searched: '{search}'): '{best_match}'")
            if stats is not None:
                stats.record(MatchKind.AI)
            return best_match

        return None
