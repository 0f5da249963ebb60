"""
Catalogue-wide properties: every calculator evaluates without failures
for defaults, blank, zero and very large input, deterministic formulas
repeat, and the paired converters invert each other.
"""

import pytest

from calckit.evaluation.evaluator import FAILED_DISPLAY, evaluate
from calckit.fields.schemas import FieldKind

from conftest import DEFINITIONS_DIR

CALCULATOR_IDS = sorted(path.stem for path in DEFINITIONS_DIR.glob("*.yaml"))
# Sums, spreads and products of these overflow a float
HUGE_LIST = "-1e308, 1e308, 1e308, 1e308"


def _assert_no_failures(result):
    failed = [o.label for o in result.outputs if o.value == FAILED_DISPLAY]
    assert failed == [], f"{result.calculator_id}: outputs failed: {failed}"


@pytest.mark.parametrize("calculator_id", CALCULATOR_IDS)
class TestTotality:
    def test_defaults(self, calculator_registry, calculator_id):
        _assert_no_failures(evaluate(calculator_registry.get(calculator_id)))

    def test_all_blank(self, calculator_registry, calculator_id):
        calc = calculator_registry.get(calculator_id)
        _assert_no_failures(evaluate(calc, {field.id: "" for field in calc.inputs}))

    def test_all_zero(self, calculator_registry, calculator_id):
        calc = calculator_registry.get(calculator_id)
        _assert_no_failures(evaluate(calc, {field.id: 0 for field in calc.inputs}))

    def test_garbage(self, calculator_registry, calculator_id):
        calc = calculator_registry.get(calculator_id)
        _assert_no_failures(evaluate(calc, {field.id: "garbage" for field in calc.inputs}))

    def test_values_near_float_limit(self, calculator_registry, calculator_id):
        calc = calculator_registry.get(calculator_id)
        values = {
            field.id: HUGE_LIST if field.kind == FieldKind.TEXT else "1e308"
            for field in calc.inputs
        }
        _assert_no_failures(evaluate(calc, values))


@pytest.mark.parametrize("calculator_id", CALCULATOR_IDS)
def test_deterministic_outputs_repeat(calculator_registry, calculator_id):
    calc = calculator_registry.get(calculator_id)
    first, second = evaluate(calc), evaluate(calc)
    for a, b in zip(first.outputs, second.outputs):
        if a.deterministic:
            assert a.value == b.value


@pytest.mark.parametrize("calculator_id", CALCULATOR_IDS)
def test_visibility_does_not_depend_on_hidden_values(calculator_registry, calculator_id):
    calc = calculator_registry.get(calculator_id)
    baseline = evaluate(calc).visible_inputs
    hidden = [f.id for f in calc.inputs if f.id not in baseline]
    changed = evaluate(calc, {field_id: 12345 for field_id in hidden}).visible_inputs
    assert changed == baseline


class TestRoundTrips:
    @pytest.mark.parametrize("meters", [0.5, 1.75, 10, 123.456])
    def test_meters_feet(self, run_calculator, meters):
        feet = meters / 0.3048
        back = run_calculator("feet-to-meters", {"feet": feet, "inches": 0})
        assert back["Meters"] == pytest.approx(meters, abs=1e-4)
        assert run_calculator("meters-to-feet", {"meters": meters})["Feet"] == pytest.approx(feet, abs=1e-4)

    @pytest.mark.parametrize("kilograms", [0.25, 1, 70, 1000])
    def test_kilograms_pounds(self, run_calculator, kilograms):
        pounds = run_calculator("kilograms-to-pounds", {"kilograms": kilograms})["Pounds"]
        back = run_calculator("weight-converter", {"value": pounds, "from_unit": "lb", "to_unit": "kg"})
        assert back["Result"] == pytest.approx(kilograms, abs=1e-5)

    @pytest.mark.parametrize("celsius", [-40, 0, 37, 100])
    def test_celsius_fahrenheit(self, run_calculator, celsius):
        forward = run_calculator("temperature-converter", {"value": celsius, "from_unit": "c", "to_unit": "f"})
        fahrenheit = forward["Result"]
        back = run_calculator("temperature-converter", {"value": fahrenheit, "from_unit": "f", "to_unit": "c"})
        assert back["Result"] == pytest.approx(celsius, abs=0.01)

    @pytest.mark.parametrize("number", [1, 4, 9, 14, 40, 90, 400, 1994, 2024, 3999])
    def test_roman(self, run_calculator, number):
        roman = run_calculator("roman-numerals", {"decimal": number, "roman": ""})
        numeral = roman["Roman numeral"]
        assert run_calculator("roman-numerals", {"decimal": "", "roman": numeral})["Number"] == number

    @pytest.mark.parametrize("number", [0, 1, 42, 255, 1024])
    def test_binary(self, run_calculator, number):
        binary = run_calculator("binary-converter", {"decimal": number, "binary": ""})["Decimal in binary"]
        assert run_calculator("binary-converter", {"decimal": "", "binary": binary})["Binary in decimal"] == number


class TestScenarios:
    def test_bmi(self, run_calculator):
        assert run_calculator("bmi") == {
            "BMI": 22.9,
            "Category": "Normal Weight",
            "Healthy weight range": "56.7 - 76.3 kg",
        }

    def test_gcd_lcm(self, run_calculator):
        assert run_calculator("gcd")["GCD"] == 6
        assert run_calculator("lcm")["LCM"] == 24

    def test_ohms_law_default(self, run_calculator):
        assert run_calculator("ohms-law") == {"Result": "V = 12 V"}

    def test_loan_default(self, run_calculator):
        assert run_calculator("loan")["Monthly payment"] == 386.66

    def test_days_between_default(self, run_calculator):
        values = run_calculator("days-between-dates")
        assert values["Days"] == 365
        assert values["Weeks"] == 52

    def test_add_days(self, run_calculator):
        values = run_calculator("add-subtract-days", {"start_date": "2024-01-31", "days": 30})
        assert values["Resulting date"] == "2024-03-01"
        assert values["Start date weekday"] == "Wednesday"

    def test_hours_worked_overnight(self, run_calculator):
        values = run_calculator("hours-worked", {"start_time": "22:00", "end_time": "06:00", "break_minutes": 30})
        assert values["Hours worked"] == 7.5

    def test_password_generator(self, run_calculator):
        password = run_calculator("password-generator", {"length": 24})["Password"]
        assert len(password) == 24
