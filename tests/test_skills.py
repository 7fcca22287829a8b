from conftest import profile
from matching.skills import (
    UNNAMED,
    match_candidates,
    normalize_required,
    parse_skill_list,
    skill_summary,
    skills_overlap,
)


def test_parse_skill_list_normalizes_and_drops_empties():
    assert parse_skill_list(" React ,TypeScript,, ,NODE.js ") == ["react", "typescript", "node.js"]
    assert parse_skill_list("") == []
    assert parse_skill_list(None) == []
    assert parse_skill_list(" , ,") == []


def test_normalize_required_drops_blank_tokens():
    assert normalize_required(["React", " react ", "", "  ", "Go"]) == {"react", "go"}


def test_fuzzy_containment_is_symmetric():
    assert skills_overlap("java", "javascript")
    assert skills_overlap("javascript", "java")
    assert skills_overlap("react", "react.js") and skills_overlap("react.js", "react")
    assert not skills_overlap("python", "java")


def test_full_match_scenario():
    results = match_candidates(
        {"react", "typescript", "javascript"},
        [profile("John Doe", "React, TypeScript, JavaScript")],
    )
    assert len(results) == 1
    r = results[0]
    assert r.match_count == 3
    assert r.matched_skills == ["javascript", "react", "typescript"]
    assert r.all_skills == ["react", "typescript", "javascript"]


def test_case_and_whitespace_insensitive():
    results = match_candidates(["React"], [profile("A", "react , sql")])
    assert [r.matched_skills for r in results] == [["react"]]


def test_fuzzy_match_in_both_directions():
    # required "react" inside candidate "react.js", candidate "java" inside required "javascript"
    required = {"react", "javascript"}
    results = match_candidates(required, [profile("A", "react.js"), profile("B", "java")])
    by_name = {r.candidate_name: r.matched_skills for r in results}
    assert by_name == {"A": ["react"], "B": ["javascript"]}


def test_empty_skill_string_never_matches():
    pool = [profile("Empty", ""), profile("None", None), profile("Blank", " , ")]
    assert match_candidates({"python", "a", "e"}, pool) == []


def test_zero_match_candidates_are_dropped():
    results = match_candidates({"python"}, [profile("A", "java"), profile("B", "python")])
    assert [r.candidate_name for r in results] == ["B"]


def test_sorted_by_count_with_stable_ties():
    pool = [
        profile("one-a", "python"),
        profile("two-a", "python, sql"),
        profile("one-b", "sql"),
        profile("three", "python, sql, docker"),
        profile("two-b", "docker, python"),
        profile("one-c", "docker"),
    ]
    results = match_candidates({"python", "sql", "docker"}, pool)
    assert [r.candidate_name for r in results] == ["three", "two-a", "two-b", "one-a", "one-b", "one-c"]


def test_results_are_subsets_of_required_with_consistent_counts():
    required = {"python", "sql", "aws", "go"}
    pool = [
        profile("A", "Python, PostgreSQL, Django"),
        profile("B", "golang, aws lambda, python3"),
        profile("C", "excel"),
        profile("D", "SQL"),
    ]
    results = match_candidates(required, pool)
    assert results
    for r in results:
        assert set(r.matched_skills) <= required
        assert r.match_count == len(r.matched_skills) >= 1
        assert r.matched_skills == sorted(r.matched_skills)
    counts = [r.match_count for r in results]
    assert counts == sorted(counts, reverse=True)


def test_duplicate_candidate_skills_count_each_required_skill_once():
    results = match_candidates({"react"}, [profile("A", "react, React, react.js")])
    assert results[0].match_count == 1
    assert results[0].matched_skills == ["react"]


def test_short_tokens_match_loosely():
    # "c" is contained in plenty of unrelated skills; this is accepted behavior
    results = match_candidates({"c"}, [profile("A", "javascript")])
    assert results[0].matched_skills == ["c"]


def test_defaults_and_passthrough():
    feedback = {"communication": "clear", "raw": "everything"}
    results = match_candidates({"sql"}, [profile(None, "sql", feedback=feedback, transcript=None)])
    r = results[0]
    assert r.candidate_name == UNNAMED
    assert r.transcript == ""
    assert r.feedback == feedback


def test_skill_summary_mentions_matched_then_other_skills():
    text = skill_summary("Jane", ["react"], ["react", "graphql"])
    assert text == "Jane covers 1 required skill: react. Other listed skills: graphql."
    assert skill_summary("Jo", ["a", "b"], ["a", "b"]) == "Jo covers 2 required skills: a, b."
