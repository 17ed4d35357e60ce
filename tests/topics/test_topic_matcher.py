from __future__ import annotations

import json

import pytest

from zijwerkenvooru.topics import TopicMatch, TopicMatcher, load_json_mapping


def test_subtopic_hit_tags_parent_and_counts_subtopic(taxonomy):
    matcher = TopicMatcher(taxonomy)

    matches = matcher.match("Vragen over KERNENERGIE")

    assert matches == [TopicMatch(tag_key="climate", contribution_key="energy")]
    assert matcher.tags("Vragen over kernenergie") == ["climate"]
    assert matcher.contribution_keys("Vragen over kernenergie") == ["energy"]


def test_text_can_match_several_topics(taxonomy):
    matcher = TopicMatcher(taxonomy)

    assert matcher.tags("klimaat en pensioen") == ["climate", "pensions"]
    assert matcher.contribution_keys("energie voor het klimaat") == ["energy", "climate"]


def test_tags_are_unique_per_topic(taxonomy):
    matcher = TopicMatcher(taxonomy)

    assert matcher.tags("klimaat en energie") == ["climate"]


def test_no_match_for_empty_text(taxonomy):
    matcher = TopicMatcher(taxonomy)

    assert matcher.match(None) == []
    assert matcher.tags("begroting") == []


def test_load_json_mapping(tmp_path):
    path = tmp_path / "topics.json"
    path.write_text(json.dumps({"climate": {"keywords": ["klimaat"]}}), encoding="utf8")

    assert load_json_mapping(path) == {"climate": {"keywords": ["klimaat"]}}
    assert load_json_mapping(tmp_path / "missing.json") == {}
    assert load_json_mapping(None) == {}

    path.write_text("[]", encoding="utf8")
    with pytest.raises(ValueError):
        load_json_mapping(path)
