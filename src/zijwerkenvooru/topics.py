"""Keyword based matching of free text against the topic taxonomy."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
import json
import logging

LOGGER = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class TopicMatch:
    """One keyword hit.

    ``tag_key`` is always a main topic and is what a text gets tagged with.
    ``contribution_key`` is the exact (sub)topic the keyword belongs to and is
    what contribution rankings count under.
    """

    tag_key: str
    contribution_key: str


@dataclass(slots=True, frozen=True)
class Topic:
    key: str
    keywords: Tuple[str, ...]
    subtopics: Tuple[Tuple[str, Tuple[str, ...]], ...]


class TopicMatcher:
    """Case-insensitive substring matcher over a two level taxonomy."""

    def __init__(self, taxonomy: Mapping[str, Mapping[str, Any]]) -> None:
        self._topics = tuple(_parse_topic(key, data) for key, data in taxonomy.items())

    @property
    def topics(self) -> Tuple[Topic, ...]:
        return self._topics

    def match(self, text: Optional[str]) -> List[TopicMatch]:
        """Return every topic and subtopic hit for ``text``.

        Within one keyword list the first hit is enough; matching continues
        with the remaining subtopics and topics.
        """

        lowered = (text or "").lower()
        if not lowered:
            return []
        matches: List[TopicMatch] = []
        for topic in self._topics:
            for subtopic_key, keywords in topic.subtopics:
                if _contains_any(lowered, keywords):
                    matches.append(TopicMatch(tag_key=topic.key, contribution_key=subtopic_key))
            if _contains_any(lowered, topic.keywords):
                matches.append(TopicMatch(tag_key=topic.key, contribution_key=topic.key))
        return matches

    def tags(self, text: Optional[str]) -> List[str]:
        """Main topics ``text`` belongs to, in taxonomy order, without duplicates."""

        return list(dict.fromkeys(match.tag_key for match in self.match(text)))

    def contribution_keys(self, text: Optional[str]) -> List[str]:
        return list(dict.fromkeys(match.contribution_key for match in self.match(text)))


def _contains_any(text: str, keywords: Tuple[str, ...]) -> bool:
    return any(keyword and keyword in text for keyword in keywords)


def _parse_topic(key: str, data: Mapping[str, Any]) -> Topic:
    keywords = tuple(str(keyword).lower() for keyword in data.get("keywords") or ())
    subtopics = tuple(
        (str(sub_key), tuple(str(keyword).lower() for keyword in sub_keywords or ()))
        for sub_key, sub_keywords in (data.get("subtopics") or {}).items()
    )
    return Topic(key=str(key), keywords=keywords, subtopics=subtopics)


def load_json_mapping(path: Union[str, Path, None]) -> Dict[str, Any]:
    """Load a JSON object from ``path``; a missing path yields an empty mapping."""

    if not path:
        return {}
    target = Path(path)
    if not target.exists():
        LOGGER.warning("Configuration file %s not found", target)
        return {}
    with target.open("r", encoding="utf8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError(f"{target} must contain a JSON object")
    return data


__all__ = ["Topic", "TopicMatch", "TopicMatcher", "load_json_mapping"]
