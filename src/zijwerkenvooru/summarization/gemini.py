"""Gemini powered summaries of question topics and proposition titles."""
from __future__ import annotations

from importlib import import_module
from typing import TYPE_CHECKING, Any, Dict, Literal, Optional, Sequence
import logging
import math

if TYPE_CHECKING:  # pragma: no cover - imported for type checkers only
    from google import genai  # noqa: F401
    from google.genai import types  # noqa: F401

LOGGER = logging.getLogger(__name__)

SummaryKind = Literal["topics", "title"]

_PROMPTS: Dict[str, str] = {
    "topics": (
        "Je krijgt een lijst van onderwerpen van parlementaire vragen, gescheiden "
        "door puntkomma's. Schrijf één beknopt onderwerp van hoogstens twintig "
        "woorden dat alle onderwerpen omvat, in dezelfde stijl als de invoer. "
        "Schrijf in het Nederlands en geef enkel het onderwerp terug, zonder "
        "uitleg of opsomming.\n\nOnderwerpen:\n{text}"
    ),
    "title": (
        "Je krijgt de formele titel van een wetgevend dossier. Vat die samen in "
        "één heldere, neutrale zin van hoogstens twintig woorden die het doel "
        "van de tekst weergeeft, bijvoorbeeld beginnend met 'Wetsontwerp ter'. "
        "Vermijd afkortingen en vakjargon. Schrijf in het Nederlands en geef "
        "enkel de samenvatting terug.\n\nTitel:\n{text}"
    ),
}

_TEXTUAL_SAFETY_CATEGORY_NAMES: Sequence[str] = (
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_CIVIC_INTEGRITY",
)


def strip_markdown(text: str) -> str:
    """Drop bold markers models like to add around short answers."""

    return text.replace("**", "").replace("__", "").strip()


class GeminiSummarizer:
    """Summarise parliamentary texts with the Gemini API."""

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str = "https://generativelanguage.googleapis.com",
        model: str = "gemini-2.5-flash",
        timeout: float = 60.0,
        max_retries: int = 3,
        enable_safety_settings: bool = False,
    ) -> None:
        if not api_key:
            raise ValueError("A Gemini API key must be provided")
        self._base_url = base_url.rstrip("/")
        self._model = model
        self._timeout = timeout
        self._max_retries = max(1, max_retries)
        self._enable_safety_settings = enable_safety_settings
        self._genai = import_module("google.genai")
        self._types = import_module("google.genai.types")
        self._client = self._genai.Client(api_key=api_key, http_options=self._http_options())

    @property
    def model(self) -> str:
        return self._model

    def _http_options(self):
        options: dict[str, object] = {}
        if self._base_url:
            options["base_url"] = self._base_url
        # The SDK expects the timeout in milliseconds.
        timeout_ms = math.ceil(self._timeout * 1000)
        if timeout_ms > 0:
            options["timeout"] = timeout_ms
        return self._types.HttpOptions(**options)

    def summarize(self, text: str, kind: SummaryKind = "topics") -> str:
        """Return a short Dutch summary of ``text``."""

        prompt = _PROMPTS[kind].format(text=text.strip())
        config = self._generation_config()
        last_exc: Optional[Exception] = None
        for attempt in range(1, self._max_retries + 1):
            try:
                response = self._client.models.generate_content(
                    model=self._model,
                    contents=prompt,
                    config=config,
                )
                return strip_markdown(self._extract_text(response))
            except self._genai.errors.APIError as exc:  # pragma: no cover - network failures
                last_exc = exc
                LOGGER.warning("Gemini request failed (attempt %s/%s): %s", attempt, self._max_retries, exc)
        raise RuntimeError("Failed to generate summary via Gemini") from last_exc

    def _generation_config(self):
        config = self._types.GenerateContentConfig(
            temperature=0.2,
            top_p=0.95,
            max_output_tokens=256,
        )
        if not self._enable_safety_settings:
            harm_category = self._types.HarmCategory
            config.safety_settings = [
                self._types.SafetySetting(
                    category=getattr(harm_category, name),
                    threshold=self._types.HarmBlockThreshold.BLOCK_NONE,
                )
                for name in _TEXTUAL_SAFETY_CATEGORY_NAMES
            ]
        return config

    @staticmethod
    def _extract_text(response: Any) -> str:
        text = (response.text or "").strip()
        if text:
            return text
        for candidate in response.candidates or ():
            if not (candidate.content and candidate.content.parts):
                continue
            for part in candidate.content.parts:
                part_text = (getattr(part, "text", None) or "").strip()
                if part_text:
                    return part_text
        raise RuntimeError("Gemini response did not contain text")


__all__ = ["GeminiSummarizer", "SummaryKind", "strip_markdown"]
