from __future__ import annotations

from src.cleaning_tracker.cleaning_tracker.cleanings.model import Cleaning
from src.cleaning_tracker.cleaning_tracker.payroll.calculator.standard_calculator import StandardPayoutCalculator


def _cleaning(rate):
    return Cleaning(id="x", cleaner_id="c", cleaner_name="C", machine="M", timestamp=None, payment_rate=rate)


def test_rate_precedence():
    calc = StandardPayoutCalculator()

    assert calc.rate_for(_cleaning(120), 150) == 120
    assert calc.rate_for(_cleaning(None), None, 150) == 150
    assert calc.rate_for(_cleaning(None)) == 100


def test_zero_rate_counts_as_unset():
    assert StandardPayoutCalculator().rate_for(_cleaning(0), 80) == 80


def test_total_and_configured_default():
    calc = StandardPayoutCalculator(default_rate=90)

    assert calc.total([_cleaning(100), _cleaning(120), _cleaning(None)]) == 310
    assert calc.total([]) == 0
