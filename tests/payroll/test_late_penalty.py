import pytest

from staff_payroll.core.enums import LateConsequence
from staff_payroll.core.rules import PayrollRules
from staff_payroll.payroll.late_penalty import LatePenaltyLadder, ordinal, round_half_up


@pytest.mark.parametrize(
    "late_count, expected",
    [(0, 0), (1, 0), (2, 0), (3, 200), (4, 450), (5, 950), (6, 1450)],
)
def test_total_penalty_ladder(late_count, expected):
    assert LatePenaltyLadder(200).total_penalty(late_count, 500) == expected


def test_total_penalty_never_decreases():
    ladder = LatePenaltyLadder(200)
    totals = [ladder.total_penalty(n, 517) for n in range(0, 31)]
    assert totals == sorted(totals)


def test_half_day_rounded_once_at_the_end():
    assert LatePenaltyLadder(200).total_penalty(4, 333) == 367


def test_fine_amount_comes_from_rules():
    ladder = LatePenaltyLadder.from_rules(PayrollRules(late_fine_amount=300))
    assert ladder.total_penalty(3, 500) == 300
    assert ladder.consequence(3).message == "3rd late - ₹300 fine"


def test_consequences_per_ordinal():
    ladder = LatePenaltyLadder(200)

    assert ladder.consequence(0) is None
    assert ladder.consequence(1).kind == LateConsequence.WARNING
    assert ladder.consequence(2).kind == LateConsequence.WARNING
    assert ladder.consequence(3).kind == LateConsequence.FINE
    assert ladder.consequence(3).message == "3rd late - ₹200 fine"
    assert ladder.consequence(4).kind == LateConsequence.HALF_DAY
    assert ladder.consequence(4).amount(500) == 250
    assert ladder.consequence(7).kind == LateConsequence.ABSENT
    assert ladder.consequence(7).message == "7th late - Marked absent"


@pytest.mark.parametrize("n, text", [(1, "1st"), (2, "2nd"), (3, "3rd"), (11, "11th"), (12, "12th"), (21, "21st")])
def test_ordinal(n, text):
    assert ordinal(n) == text


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(322.58) == 323
    assert round_half_up(322.4) == 322
