import pytest

from eros_engine.memories import MemoryCandidate, normalise_category, parse_memory_candidates


def test_parse_memory_candidates_handles_clean_json():
    raw = """{"memories":[{"content":"住在上海","category":"fact"},
                          {"content":"喜欢咖啡","category":"preference"}]}"""
    cands = parse_memory_candidates(raw)
    assert cands == [
        MemoryCandidate(content="住在上海", category="fact"),
        MemoryCandidate(content="喜欢咖啡", category="preference"),
    ]


def test_parse_memory_candidates_handles_fenced_block():
    raw = (
        "Sure, here you go:\n```json\n"
        '{"memories":[{"content":"养了一只猫","category":"fact"}]}\n'
        "```"
    )
    cands = parse_memory_candidates(raw)
    assert len(cands) == 1
    assert cands[0].content == "养了一只猫"


def test_parse_memory_candidates_returns_empty_on_garbage():
    assert parse_memory_candidates("nope, no json") == []
    assert parse_memory_candidates('{"facts":[]}') == []


def test_parse_memory_candidates_skips_malformed_items():
    raw = """{"memories":[
        {"content":"a","category":"fact"},
        {"content":"b"},
        {"content":"c","category":"event"}
    ]}"""
    cands = parse_memory_candidates(raw)
    assert [c.content for c in cands] == ["a", "c"]


def test_parse_memory_candidates_ignores_extra_fields():
    raw = '{"memories":[{"content":"a","category":"fact","score":3}]}'
    assert parse_memory_candidates(raw) == [MemoryCandidate("a", "fact")]


def test_parse_memory_candidates_non_array_memories():
    assert parse_memory_candidates('{"memories": "none"}') == []


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("fact", "fact"),
        ("PREFERENCE", "preference"),
        ("  Event  ", "event"),
        ("emotion", "emotion"),
        ("relation", "relation"),
    ],
)
def test_normalise_category_passes_known_values(raw, expected):
    assert normalise_category(raw) == expected


@pytest.mark.parametrize("raw", ["opinion", "", "分类"])
def test_normalise_category_collapses_unknowns_to_fact(raw):
    assert normalise_category(raw) == "fact"