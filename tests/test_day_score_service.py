import math
from concurrent.futures import ThreadPoolExecutor
from datetime import date, datetime

import pytest

from dayscore.core.config import settings
from dayscore.core.errors import ConfigurationError, InputLimitError, ValidationError
from dayscore.models.group import GroupMember
from dayscore.services.day_score_service import compute_day_scores, top_dates

D1 = date(2026, 3, 6)
D2 = date(2026, 3, 7)
D3 = date(2026, 3, 8)


def test_three_of_four_in_the_morning(make_members, make_availability):
    members = make_members("a", "b", "c", "d")
    availabilities = [make_availability(u, type="slots", slots=["Mañana"]) for u in ("a", "b", "c")]

    first = compute_day_scores("g-1", members, availabilities)
    second = compute_day_scores("g-1", members, availabilities)

    assert len(first) == 1
    result = first[0]
    assert result.date == D1
    assert result.available_count == 3
    assert result.total_members == 4
    assert result.score == pytest.approx(0.7 * 0.75 + 0.3 * 360 / 1440)
    assert first == second


def test_ranks_all_declared_dates(make_members, make_availability):
    members = make_members("a", "b", "c")
    availabilities = [
        make_availability("a", day=D1),
        make_availability("a", day=D2),
        make_availability("b", day=D2),
        make_availability("c", day=D2, type="range", start_time="18:00", end_time="23:00"),
        make_availability("b", day=D3, type="slots", slots=["evening"]),
    ]
    ranked = compute_day_scores("g-1", members, availabilities)
    assert [s.date for s in ranked] == [D2, D1, D3]
    assert [s.available_count for s in ranked] == [3, 1, 1]


def test_dates_without_declarations_are_not_synthesized(make_members, make_availability):
    ranked = compute_day_scores("g-1", make_members("a"), [make_availability("a", day=D3)])
    assert [s.date for s in ranked] == [D3]


def test_no_availabilities_and_no_members():
    assert compute_day_scores("g-1", [], []) == []


def test_stale_member_does_not_inflate_scores(make_members, make_availability):
    members = make_members("a", "b")
    with_stale = [make_availability("a"), make_availability("gone")]
    assert compute_day_scores("g-1", members, with_stale) == compute_day_scores(
        "g-1", members, [make_availability("a")]
    )


def test_declarations_before_joining_are_ignored(make_availability):
    members = [
        GroupMember(group_id="g-1", user_id="a"),
        GroupMember(group_id="g-1", user_id="late", joined_at=datetime(2026, 3, 7, 12)),
    ]
    records = [make_availability("a", day=D1), make_availability("late", day=D1), make_availability("late", day=D2)]
    ranked = compute_day_scores("g-1", members, records)
    by_date = {s.date: s for s in ranked}
    assert by_date[D1].available_count == 1
    assert by_date[D2].available_count == 1
    assert by_date[D1].total_members == 2


def test_upserted_record_replaces_earlier_one(make_members, make_availability):
    members = make_members("a", "b")
    records = [make_availability("a"), make_availability("a", type="slots", slots=["morning"])]
    result = compute_day_scores("g-1", members, records)[0]
    assert result.available_count == 1
    assert result.score == pytest.approx(0.7 * 0.5 + 0.3 * 360 / 1440)


def test_invalid_record_fails_whole_call(make_members, make_availability):
    members = make_members("a", "b")
    records = [make_availability("a"), make_availability("b", day=D2, type="range", start_time="20:00", end_time="19:00")]
    with pytest.raises(ValidationError) as exc_info:
        compute_day_scores("g-1", members, records)
    assert exc_info.value.user_id == "b"
    assert exc_info.value.date == D2


def test_invalid_weights_raise_unless_fallback(make_members, make_availability):
    members = make_members("a")
    records = [make_availability("a")]
    bad = {"scoreWeights": {"attendance": -1, "overlap": 1}}
    with pytest.raises(ConfigurationError):
        compute_day_scores("g-1", members, records, config=bad)
    assert compute_day_scores("g-1", members, records, config=bad, fallback_to_defaults=True)[0].score == pytest.approx(1.0)


@pytest.mark.parametrize("weight", [math.inf, math.nan])
def test_non_finite_weight_never_yields_a_score(make_members, make_availability, weight):
    members = make_members("a", "b", "c", "d")
    records = [make_availability("a", type="slots", slots=["morning"])]
    with pytest.raises(ConfigurationError):
        compute_day_scores("g-1", members, records, config={"scoreWeights": {"attendance": weight}})
    fallback = compute_day_scores(
        "g-1", members, records, config={"scoreWeights": {"attendance": weight}}, fallback_to_defaults=True
    )
    assert fallback[0].score == pytest.approx(0.7 * 0.25 + 0.3 * 360 / 1440)


def test_input_ceiling(monkeypatch, make_members, make_availability):
    monkeypatch.setattr(settings, "max_dates", 1)
    records = [make_availability("a", day=D1), make_availability("a", day=D2)]
    with pytest.raises(InputLimitError):
        compute_day_scores("g-1", make_members("a"), records)


def test_adding_fully_available_member_is_monotonic(make_members, make_availability):
    members = make_members("a", "b", "c")
    base = [
        make_availability("a", type="range", start_time="09:00", end_time="12:00"),
        make_availability("b", type="slots", slots=["afternoon"]),
    ]
    before = compute_day_scores("g-1", members, base)[0]
    after = compute_day_scores("g-1", members, base + [make_availability("c")])[0]
    assert after.score >= before.score


def test_top_dates_defaults_and_override(make_members, make_availability):
    members = make_members("a", "b")
    records = [make_availability("a", day=date(2026, 3, d)) for d in range(1, 6)]
    assert len(top_dates("g-1", members, records)) == 3
    assert len(top_dates("g-1", members, records, n=1)) == 1
    assert len(top_dates("g-1", members, records, config={"topN": 4})) == 4
    # equal scores: earliest dates first
    assert [s.date.day for s in top_dates("g-1", members, records)] == [1, 2, 3]


def test_concurrent_groups_match_sequential(make_members, make_availability):
    members = make_members("a", "b", "c") + make_members("a", "x", group_id="g-2")
    shared = [
        make_availability("a", day=D1),
        make_availability("b", day=D1, type="slots", slots=["morning", "evening"]),
        make_availability("c", day=D2, type="range", start_time="10:00", end_time="15:30"),
        make_availability("a", day=D2, group_id="g-2"),
        make_availability("x", day=D2, group_id="g-2", type="slots", slots=["afternoon"]),
        make_availability("x", day=D3, group_id="g-2"),
    ]
    sequential = {g: compute_day_scores(g, members, shared) for g in ("g-1", "g-2")}

    with ThreadPoolExecutor(max_workers=4) as pool:
        futures = {g: pool.submit(compute_day_scores, g, members, shared) for g in ("g-1", "g-2") * 10}
        concurrent = {g: f.result() for g, f in futures.items()}

    assert concurrent == sequential
