"""
Tests for load-time definition checks.
"""

from calckit.calculators.validation import IssueLevel, validate_definition, validate_definitions

from conftest import build_definition

UNIT_SELECT = {
    "id": "unit",
    "label": "Unit",
    "kind": "select",
    "default": "m",
    "options": [{"label": "Meters", "value": "m"}, {"label": "Feet", "value": "ft"}],
}
METERS = {"id": "meters", "label": "Meters", "kind": "number", "default": 1}


def errors(report):
    return [issue.message for issue in report.errors]


def warnings(report):
    return [issue.message for issue in report.warnings]


class TestCleanDefinition:
    def test_minimal_definition_has_no_issues(self, formula_registry):
        report = validate_definition(build_definition(), formula_registry)
        assert report.ok
        assert report.issues == []

    def test_shipped_catalogue_has_no_errors(self, calculator_registry):
        assert calculator_registry.report.errors == []


class TestInputChecks:
    def test_no_inputs_or_outputs(self, formula_registry):
        report = validate_definition(build_definition(inputs=[], outputs=[]), formula_registry)
        assert "Calculator has no inputs" in errors(report)
        assert "Calculator has no outputs" in errors(report)

    def test_duplicate_input_id(self, formula_registry):
        report = validate_definition(build_definition(inputs=[METERS, METERS]), formula_registry)
        assert "Duplicate input id 'meters'" in errors(report)

    def test_select_without_options(self, formula_registry):
        unit = {"id": "unit", "label": "Unit", "kind": "select"}
        report = validate_definition(build_definition(inputs=[METERS, unit]), formula_registry)
        assert "Select input 'unit' has no options" in errors(report)

    def test_select_default_not_in_options_is_warning(self, formula_registry):
        unit = dict(UNIT_SELECT, default="yd")
        report = validate_definition(build_definition(inputs=[METERS, unit]), formula_registry)
        assert report.ok
        assert "Default of select input 'unit' is not one of its options" in warnings(report)

    def test_number_default_of_wrong_kind(self, formula_registry):
        meters = dict(METERS, default="tall")
        report = validate_definition(build_definition(inputs=[meters]), formula_registry)
        assert "Default 'tall' of input 'meters' does not match kind 'number'" in errors(report)

    def test_checkbox_default_must_be_bool(self, formula_registry):
        flag = {"id": "round", "label": "Round", "kind": "checkbox", "default": "yes"}
        report = validate_definition(build_definition(inputs=[METERS, flag]), formula_registry)
        assert any("input 'round' does not match kind 'checkbox'" in m for m in errors(report))

    def test_impossible_date_default(self, formula_registry):
        day = {"id": "day", "label": "Day", "kind": "date", "default": "2024-02-30"}
        report = validate_definition(build_definition(inputs=[METERS, day]), formula_registry)
        assert any("input 'day' does not match kind 'date'" in m for m in errors(report))

    def test_numeric_string_default_is_accepted(self, formula_registry):
        meters = dict(METERS, default="1.5")
        assert validate_definition(build_definition(inputs=[meters]), formula_registry).ok


class TestConditionChecks:
    def test_condition_on_itself(self, formula_registry):
        meters = dict(METERS, condition={"field": "meters", "op": "truthy"})
        report = validate_definition(build_definition(inputs=[meters]), formula_registry)
        assert "Condition of input 'meters' depends on itself" in errors(report)

    def test_condition_on_undeclared_input(self, formula_registry):
        meters = dict(METERS, condition={"field": "unit", "op": "equals", "value": "m"})
        report = validate_definition(build_definition(inputs=[meters]), formula_registry)
        assert "Condition of input 'meters' reads undeclared input 'unit'" in errors(report)

    def test_condition_on_later_input(self, formula_registry):
        meters = dict(METERS, condition={"field": "unit", "op": "equals", "value": "m"})
        report = validate_definition(build_definition(inputs=[meters, UNIT_SELECT]), formula_registry)
        assert "Condition of input 'meters' reads 'unit', which is declared after it" in errors(report)

    def test_nested_condition_dependencies_are_checked(self, formula_registry):
        condition = {"any_of": [
            {"field": "unit", "op": "equals", "value": "m"},
            {"field": "mode", "op": "truthy"},
        ]}
        meters = dict(METERS, condition=condition)
        report = validate_definition(build_definition(inputs=[UNIT_SELECT, meters]), formula_registry)
        assert errors(report) == ["Condition of input 'meters' reads undeclared input 'mode'"]

    def test_condition_on_earlier_input_is_fine(self, formula_registry):
        meters = dict(METERS, condition={"field": "unit", "op": "equals", "value": "m"})
        report = validate_definition(build_definition(inputs=[UNIT_SELECT, meters]), formula_registry)
        assert report.ok


class TestOutputChecks:
    def test_unknown_formula(self, formula_registry):
        outputs = [{"label": "Feet", "formula": "conversion.meters_to_cubits"}]
        report = validate_definition(build_definition(outputs=outputs), formula_registry)
        assert errors(report) == ["Output 0 ('Feet') uses unknown formula 'conversion.meters_to_cubits'"]

    def test_unknown_params(self, formula_registry):
        outputs = [{"label": "Feet", "formula": "conversion.meters_to_feet", "params": {"precision": 2}}]
        report = validate_definition(build_definition(outputs=outputs), formula_registry)
        assert any("parameters ['precision']" in m for m in errors(report))

    def test_known_params_are_accepted(self, formula_registry):
        outputs = [{"label": "Feet", "formula": "conversion.meters_to_feet", "params": {"decimals": 2}}]
        assert validate_definition(build_definition(outputs=outputs), formula_registry).ok

    def test_bind_of_key_the_formula_does_not_read(self, formula_registry):
        outputs = [{"label": "Feet", "formula": "conversion.meters_to_feet", "bind": {"kilograms": "meters"}}]
        report = validate_definition(build_definition(outputs=outputs), formula_registry)
        assert any("binds keys ['kilograms']" in m for m in errors(report))

    def test_read_of_missing_input(self, formula_registry):
        outputs = [{"label": "Meters", "formula": "conversion.feet_to_meters"}]
        report = validate_definition(build_definition(outputs=outputs), formula_registry)
        assert "Output 0 ('Meters') reads 'feet', which is not an input of this calculator" in errors(report)
        assert "Output 0 ('Meters') reads 'inches', which is not an input of this calculator" in errors(report)

    def test_bind_redirects_reads(self, formula_registry):
        height = {"id": "height_m", "label": "Height", "kind": "number", "default": 1.8}
        outputs = [{"label": "Feet", "formula": "conversion.meters_to_feet", "bind": {"meters": "height_m"}}]
        report = validate_definition(build_definition(inputs=[height], outputs=outputs), formula_registry)
        assert report.ok

    def test_params_pin_reads(self, formula_registry):
        value = {"id": "value", "label": "Kilograms", "kind": "number", "default": 1}
        outputs = [{
            "label": "Pounds",
            "formula": "conversion.weight",
            "params": {"from_unit": "kg", "to_unit": "lb"},
        }]
        report = validate_definition(build_definition(inputs=[value], outputs=outputs), formula_registry)
        assert report.ok

    def test_ungated_read_of_conditional_input_warns(self, formula_registry):
        meters = dict(METERS, condition={"field": "unit", "op": "equals", "value": "m"})
        report = validate_definition(build_definition(inputs=[UNIT_SELECT, meters]), formula_registry)
        assert report.ok
        assert warnings(report) == [
            "Output 0 ('Feet') reads conditional input 'meters' without checking its visibility"
        ]

    def test_gated_read_of_conditional_input_is_silent(self, calculator_registry, formula_registry):
        report = validate_definition(calculator_registry.get("bmi"), formula_registry)
        assert report.issues == []


class TestContentChecks:
    def test_missing_meta(self, formula_registry):
        report = validate_definition(build_definition(meta=None), formula_registry)
        assert report.ok
        assert warnings(report) == ["Missing meta tags"]

    def test_missing_keywords(self, formula_registry):
        meta = {"title": "Sample", "description": "Sample calculator"}
        report = validate_definition(build_definition(meta=meta), formula_registry)
        assert warnings(report) == ["Missing keywords"]

    def test_missing_content(self, formula_registry):
        report = validate_definition(build_definition(content=None), formula_registry)
        assert warnings(report) == ["Missing content (what_is, how_to, faq)"]


class TestValidateDefinitions:
    def test_duplicate_ids_across_definitions(self, formula_registry):
        report = validate_definitions(
            [build_definition("same"), build_definition("same"), build_definition("other")],
            formula_registry,
        )
        duplicates = [i for i in report.errors if i.message == "Duplicate calculator id 'same'"]
        assert len(duplicates) == 1
        assert duplicates[0].level == IssueLevel.ERROR

    def test_issues_carry_calculator_id(self, formula_registry):
        report = validate_definitions([build_definition("broken", outputs=[])], formula_registry)
        assert [i.calculator_id for i in report.errors] == ["broken"]
