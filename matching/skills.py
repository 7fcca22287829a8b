from typing import Iterable, List, Optional, Sequence, Set
from schemas import CandidateProfile, MatchResult

UNNAMED = "Unnamed"


def normalize_skill(skill: str) -> str:
    return skill.strip().lower()


def parse_skill_list(raw: Optional[str]) -> List[str]:
    """Comma-separated skill string -> normalized tokens, empties dropped."""
    if not raw:
        return []
    return [s for s in (normalize_skill(part) for part in raw.split(",")) if s]


def normalize_required(skills: Iterable[str]) -> Set[str]:
    # An empty token would be a substring of every candidate skill
    return {s for s in (normalize_skill(x) for x in skills if x) if s}


def skills_overlap(a: str, b: str) -> bool:
    """Fuzzy containment: either token is a substring of the other."""
    return a in b or b in a


def matched_required(required: Set[str], c_skills: Sequence[str]) -> List[str]:
    return sorted(r for r in required if any(skills_overlap(c, r) for c in c_skills))


def skill_summary(name: str, matched: Sequence[str], all_skills: Sequence[str]) -> str:
    n = len(matched)
    summary = f"{name} covers {n} required skill{'' if n == 1 else 's'}: {', '.join(matched)}."
    others = [s for s in all_skills if s not in matched]
    if others:
        summary += f" Other listed skills: {', '.join(others)}."
    return summary


def match_candidates(required: Iterable[str], candidates: Sequence[CandidateProfile]) -> List[MatchResult]:
    """Rank candidates by how many required skills they satisfy.

    Candidates with no match are dropped. Ties keep the input order.
    """
    job_set = normalize_required(required)
    matches: List[MatchResult] = []

    for c in candidates:
        skills = parse_skill_list(c.skills)
        matched = matched_required(job_set, skills)
        if not matched:
            continue
        name = c.candidate_name or UNNAMED
        matches.append(
            MatchResult(
                candidate_name=name,
                match_count=len(matched),
                matched_skills=matched,
                all_skills=skills,
                summary=skill_summary(name, matched, skills),
                feedback=c.feedback,
                transcript=c.transcript or "",
            )
        )

    # sorted() is stable, including with reverse=True
    return sorted(matches, key=lambda m: m.match_count, reverse=True)
