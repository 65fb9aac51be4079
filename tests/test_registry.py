"""Tests para el registro de tipos de campo y el despachador."""

from datetime import date, datetime

import pytest

from formwizard.errors import UnsupportedFieldType
from formwizard.core.registry import (
    CheckboxBehavior,
    ChoiceBehavior,
    DateBehavior,
    LongTextBehavior,
    TextBehavior,
    dispatch,
    register_behavior,
    registered_types,
    resolve,
)
from formwizard.models import FieldType, FormField


@pytest.fixture
def course_field():
    return FormField(
        id="course",
        type="dropdown",
        label="Course",
        options=[
            {"value": "math", "label": "Mathematics"},
            {"value": "bio", "label": "Biology"},
        ],
    )


class TestResolve:
    """Tests para resolve."""

    def test_every_type_registered(self):
        """Cada variante tiene exactamente un comportamiento."""
        assert set(registered_types()) == set(FieldType)

    @pytest.mark.parametrize("field_type,behavior_cls", [
        ("text", TextBehavior),
        ("email", TextBehavior),
        ("tel", TextBehavior),
        ("textarea", LongTextBehavior),
        ("date", DateBehavior),
        ("dropdown", ChoiceBehavior),
        ("radio", ChoiceBehavior),
        ("checkbox", CheckboxBehavior),
    ])
    def test_resolve_by_string(self, field_type, behavior_cls):
        assert isinstance(resolve(field_type), behavior_cls)

    def test_resolve_by_enum(self):
        assert resolve(FieldType.RADIO) is resolve("radio")

    def test_unsupported(self):
        with pytest.raises(UnsupportedFieldType, match="Unsupported field type: slider"):
            resolve("slider")

    def test_register_requires_field_type(self):
        with pytest.raises(TypeError):
            register_behavior("slider", TextBehavior())

    def test_defaults(self):
        """Valores iniciales por tipo."""
        assert resolve("text").default() == ""
        assert resolve("textarea").default() == ""
        assert resolve("dropdown").default() == ""
        assert resolve("checkbox").default() is False
        assert resolve("date").default() is None

    def test_choice_types_require_options(self):
        assert resolve("dropdown").requires_options
        assert resolve("radio").requires_options
        assert not resolve("text").requires_options

    def test_input_kinds(self):
        """Estrategia de interacción por variante."""
        assert resolve("textarea").input_kind == "multiline"
        assert resolve("dropdown").input_kind == "select"
        assert resolve("radio").input_kind == "radio"
        assert resolve("checkbox").input_kind == "confirm"
        assert resolve("date").input_kind == "date"
        assert resolve("email").input_kind == "text"


class TestCoerce:
    """Tests para la traducción de entradas crudas."""

    def test_text_accepts_numbers(self):
        fld = FormField(id="age", type="text", label="Age")
        assert resolve("text").coerce(fld, 42) == "42"
        assert resolve("text").coerce(fld, None) == ""

    def test_text_rejects_other(self):
        fld = FormField(id="age", type="text", label="Age")
        with pytest.raises(ValueError):
            resolve("text").coerce(fld, ["a"])

    def test_date_from_iso_string(self):
        fld = FormField(id="start", type="date", label="Start")
        behavior = resolve("date")
        assert behavior.coerce(fld, "2024-03-01") == date(2024, 3, 1)
        assert behavior.coerce(fld, datetime(2024, 3, 1, 10, 30)) == date(2024, 3, 1)
        assert behavior.coerce(fld, "") is None

    def test_date_invalid_string(self):
        fld = FormField(id="start", type="date", label="Start")
        with pytest.raises(ValueError, match="YYYY-MM-DD"):
            resolve("date").coerce(fld, "01/03/2024")

    def test_choice_by_id_or_label(self, course_field):
        behavior = resolve("dropdown")
        assert behavior.coerce(course_field, "bio") == "bio"
        assert behavior.coerce(course_field, "mathematics") == "math"
        assert behavior.coerce(course_field, "") == ""

    def test_choice_unknown_option(self, course_field):
        with pytest.raises(ValueError, match="not one of the options"):
            resolve("dropdown").coerce(course_field, "chemistry")

    @pytest.mark.parametrize("raw,expected", [
        (True, True), ("yes", True), ("Y", True), ("1", True),
        (False, False), ("no", False), ("", False), (None, False),
    ])
    def test_checkbox(self, raw, expected):
        fld = FormField(id="terms", type="checkbox", label="Terms")
        assert resolve("checkbox").coerce(fld, raw) is expected

    def test_checkbox_invalid(self):
        fld = FormField(id="terms", type="checkbox", label="Terms")
        with pytest.raises(ValueError):
            resolve("checkbox").coerce(fld, "maybe")


class TestDispatch:
    """Tests para dispatch."""

    def test_choice_view(self, course_field):
        view = dispatch(course_field, "bio")
        assert not view.unsupported
        assert view.input_kind == "select"
        assert view.options == [("math", "Mathematics"), ("bio", "Biology")]
        assert view.display_value == "Biology"

    def test_checkbox_display(self):
        fld = FormField(id="terms", type="checkbox", label="Terms")
        assert dispatch(fld, True).display_value == "Yes"
        assert dispatch(fld, False).display_value == "No"

    def test_date_display(self):
        fld = FormField(id="start", type="date", label="Start")
        assert dispatch(fld, date(2024, 3, 1)).display_value == "March 01, 2024"
        assert dispatch(fld, None).display_value == "-"

    def test_long_text_display_truncated(self):
        fld = FormField(id="notes", type="textarea", label="Notes")
        assert dispatch(fld, "x" * 50).display_value == "x" * 40 + "..."
        assert dispatch(fld, "first\nsecond").display_value == "first ..."

    def test_error_passed_through(self):
        fld = FormField(id="name", type="text", label="Name")
        assert dispatch(fld, "", "Name is required").error == "Name is required"

    def test_unsupported_does_not_raise(self):
        """Un tipo desconocido produce una vista con error visible."""
        fld = FormField(id="level", type="slider", label="Level")
        view = dispatch(fld, None)
        assert view.unsupported
        assert view.input_kind is None
        assert view.error == "Unsupported field type: slider"
