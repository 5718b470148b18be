import copy
from datetime import date

import pytest

from forge.core.errors import NotFound
from forge.core.reschedule import reschedule_session, resolve_session_index

from plan_factory import plan, week


def days_of(outcome):
    return {d.day: d for d in outcome.document.weeks[0].days}


def test_missed_tempo_moves_to_the_next_rest_day():
    doc = plan(week({"Mon": ("easy", 3), "Wed": ("tempo", 5), "Fri": ("easy", 3), "Sat": ("long", 8)}))
    outcome = reschedule_session(doc, "Wed")

    assert outcome.moved_from == "Wed"
    assert outcome.moved_to == "Thu"
    days = days_of(outcome)
    assert days["Thu"].type == "tempo"
    assert days["Thu"].distance_miles == 5
    assert days["Thu"].rest is False
    assert days["Thu"].description.endswith("(rescheduled)")
    assert days["Wed"].type == "rest"
    assert days["Wed"].rest is True
    assert days["Wed"].distance_miles == 0
    assert days["Wed"].description == "Rescheduled recovery day"


def test_week_shape_is_preserved():
    doc = plan(week({"Mon": ("easy", 3), "Wed": ("tempo", 5)}))
    before_rest = {d["day"] for d in doc["weeks"][0]["days"] if d["type"] == "rest"}
    outcome = reschedule_session(doc, "Mon")

    week_days = outcome.document.weeks[0].days
    assert len(week_days) == 7
    assert [d.day for d in week_days] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    after_rest = {d.day for d in week_days if d.type == "rest"}
    # Mon became rest, Tue stopped being rest
    assert after_rest - before_rest == {"Mon"}
    assert before_rest - after_rest == {"Tue"}


def test_input_document_is_not_mutated():
    doc = plan(week({"Wed": ("tempo", 5)}))
    snapshot = copy.deepcopy(doc)
    reschedule_session(doc, "Wed")
    assert doc == snapshot


def test_no_later_rest_day_overwrites_the_last_day():
    doc = plan(
        week(
            {
                "Mon": ("easy", 3),
                "Tue": ("rest", 0),
                "Wed": ("tempo", 5),
                "Thu": ("easy", 3),
                "Fri": ("easy", 3),
                "Sat": ("long", 8),
                "Sun": ("recovery", 2),
            }
        )
    )
    outcome = reschedule_session(doc, "Wed")
    assert outcome.moved_to == "Sun"
    days = days_of(outcome)
    assert days["Sun"].type == "tempo"
    assert days["Sun"].distance_miles == 5
    assert days["Wed"].type == "rest"


def test_rescheduling_sunday_with_no_rest_after_keeps_it_in_place():
    doc = plan(week({"Sun": ("long", 10)}))
    outcome = reschedule_session(doc, "Sun")
    assert outcome.moved_from == outcome.moved_to == "Sun"
    sunday = days_of(outcome)["Sun"]
    assert sunday.type == "long"
    assert sunday.description.endswith("(rescheduled)")


def test_marker_is_not_appended_twice():
    doc = plan(week({"Sat": ("long", 10)}))
    first = reschedule_session(doc, "Sat")
    second = reschedule_session(first.document.model_dump(), "Sun")
    assert days_of(second)["Sun"].description.count("(rescheduled)") == 1


def test_session_can_be_addressed_by_index():
    doc = plan(week({"Wed": ("tempo", 5)}))
    assert reschedule_session(doc, 2).moved_from == "Wed"
    assert reschedule_session(doc, "2").moved_from == "Wed"
    assert reschedule_session(doc, "wednesday").moved_from == "Wed"


@pytest.mark.parametrize("session_id", ["Tue", "Funday", "9", ""])
def test_rest_or_unknown_session_is_not_found(session_id):
    doc = plan(week({"Wed": ("tempo", 5)}))
    with pytest.raises(NotFound):
        reschedule_session(doc, session_id)


def test_missing_or_empty_plan_is_not_found():
    with pytest.raises(NotFound):
        reschedule_session(None, "Mon")
    with pytest.raises(NotFound):
        reschedule_session({"weeks": []}, "Mon")


def test_elapsed_mode_reschedules_within_the_current_week():
    doc = plan(week({"Wed": ("tempo", 5)}, 1), week({"Wed": ("intervals", 6)}, 2))
    outcome = reschedule_session(doc, "Wed", plan_week_start=date(2026, 10, 5), today=date(2026, 10, 14), mode="elapsed")
    assert outcome.document.weeks[0].days[2].type == "tempo"
    moved = outcome.document.weeks[1].days[3]
    assert moved.type == "intervals"


def test_resolve_session_index():
    assert resolve_session_index("Mon") == 0
    assert resolve_session_index("sun") == 6
    assert resolve_session_index(7) is None
    assert resolve_session_index("abc") is None


def test_reversed_week_is_not_found():
    doc = plan(week({"Wed": ("tempo", 5)}))
    doc["weeks"][0]["days"].reverse()
    with pytest.raises(NotFound):
        reschedule_session(doc, "Wed")


def test_duplicate_day_label_is_not_found():
    doc = plan(week({"Mon": ("easy", 3), "Wed": ("tempo", 5)}))
    doc["weeks"][0]["days"][6] = dict(doc["weeks"][0]["days"][0])
    with pytest.raises(NotFound):
        reschedule_session(doc, "Wed")
