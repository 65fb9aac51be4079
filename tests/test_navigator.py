"""Tests para SectionNavigator, progress y assemble."""

from datetime import date

import pytest

from formwizard.errors import (
    IncompleteAnswersError,
    SchemaIntegrityError,
    SessionClosedError,
)
from formwizard.core.navigator import AdvanceStatus, SectionNavigator
from formwizard.core.progress import progress
from formwizard.core.store import FormStateStore
from formwizard.core.submission import assemble
from formwizard.models import Identity


@pytest.fixture
def store(registration_schema):
    s = FormStateStore(registration_schema)
    s.initialize()
    return s


@pytest.fixture
def navigator(registration_schema, store):
    return SectionNavigator(registration_schema, store, Identity(roll_number="42"))


def fill_personal(store):
    store.set_value("name", "Ana Perez")
    store.set_value("email", "ana@example.com")


class TestProgress:
    """Tests para progress."""

    @pytest.mark.parametrize("index,total,expected", [
        (0, 1, 100.0),
        (0, 4, 25.0),
        (1, 4, 50.0),
        (3, 4, 100.0),
    ])
    def test_values(self, index, total, expected):
        assert progress(index, total) == pytest.approx(expected)

    def test_first_section_is_not_zero(self):
        assert progress(0, 3) > 0

    def test_no_sections(self):
        with pytest.raises(SchemaIntegrityError):
            progress(0, 0)

    def test_index_out_of_range(self):
        with pytest.raises(ValueError):
            progress(4, 4)
        with pytest.raises(ValueError):
            progress(-1, 4)


class TestAdvance:
    """Tests para advance."""

    def test_initial_state(self, navigator):
        assert navigator.index == 0
        assert navigator.total == 2
        assert navigator.current_section.title == "Personal"
        assert not navigator.can_retreat
        assert not navigator.is_terminal
        assert navigator.progress == pytest.approx(50.0)

    def test_blocked_by_required_email(self, navigator, store):
        """Email requerido vacío bloquea el avance."""
        store.set_value("name", "Ana Perez")

        result = navigator.advance()

        assert result.status == AdvanceStatus.BLOCKED
        assert result.blocked
        assert result.index == 0
        assert result.error_ids == ["email"]
        assert result.errors == {"email": "We need your email"}
        assert result.first_error_id == "email"
        assert result.message == (
            "Please fix the errors in the 'Personal' section before proceeding."
        )
        assert navigator.index == 0

    def test_first_error_in_declared_order(self, navigator, store):
        store.set_value("phone", "abc")
        result = navigator.advance()
        assert result.error_ids == ["name", "email", "phone"]
        assert result.first_error_id == "name"

    def test_advance_validates_only_current_section(self, navigator, store):
        fill_personal(store)

        result = navigator.advance()

        assert result.status == AdvanceStatus.ADVANCED
        assert result.index == 1
        assert result.section_title == "Preferences"
        assert navigator.is_terminal
        # La segunda sección todavía no se validó
        assert store.error("course") is None

    def test_retreat_keeps_answers(self, navigator, store):
        fill_personal(store)
        navigator.advance()
        store.set_value("course", "bio")

        assert navigator.retreat() is True
        assert navigator.index == 0
        assert store.value("course") == "bio"
        assert store.value("name") == "Ana Perez"

    def test_retreat_does_not_validate(self, navigator, store):
        fill_personal(store)
        navigator.advance()
        navigator.retreat()
        assert store.error("course") is None

    def test_retreat_at_first_section(self, navigator):
        assert navigator.retreat() is False
        assert navigator.index == 0

    def test_terminal_blocked(self, navigator, store):
        fill_personal(store)
        navigator.advance()
        store.set_value("course", "math")

        result = navigator.advance()

        assert result.blocked
        assert result.error_ids == ["terms"]
        assert not navigator.submitted

    def test_submit_from_terminal(self, navigator, store, registration_schema):
        """Avanzar desde la última sección ensambla el registro."""
        fill_personal(store)
        navigator.advance()
        store.set_value("course", "math")
        store.set_value("terms", True)

        result = navigator.advance()

        assert result.status == AdvanceStatus.SUBMITTED
        assert navigator.submitted
        assert navigator.index == 1
        record = result.record
        assert set(record.answers) == set(registration_schema.field_ids())
        assert record.answers["course"] == "math"
        assert record.answers["phone"] == ""
        assert record.answers["start"] is None
        assert record.identity.roll_number == "42"

    def test_closed_after_submit(self, single_section_schema):
        store = FormStateStore(single_section_schema)
        store.initialize()
        navigator = SectionNavigator(single_section_schema, store)
        store.set_value("comment", "Great")

        assert navigator.advance().status == AdvanceStatus.SUBMITTED
        assert not navigator.can_retreat
        with pytest.raises(SessionClosedError):
            navigator.advance()
        with pytest.raises(SessionClosedError):
            navigator.retreat()


class TestAssemble:
    """Tests para assemble."""

    def test_covers_every_field(self, registration_schema, store):
        record = assemble(registration_schema, store.answers)
        assert list(record.answers) == registration_schema.field_ids()
        assert record.form_id == "registration"
        assert record.form_title == "Student Registration"
        assert record.version == "1.2"
        assert record.identity is None
        assert len(record.id) == 8

    def test_missing_answers(self, registration_schema):
        with pytest.raises(IncompleteAnswersError) as exc_info:
            assemble(registration_schema, {"name": "Ana"})
        assert "email" in exc_info.value.missing

    def test_extra_answers_are_dropped(self, single_section_schema):
        record = assemble(
            single_section_schema,
            {"comment": "ok", "subscribe": False, "stale": "x"},
        )
        assert record.answers == {"comment": "ok", "subscribe": False}

    def test_payload_serializes_dates(self, registration_schema, store):
        store.set_value("start", date(2024, 3, 1))
        payload = assemble(registration_schema, store.answers).to_payload()
        assert payload["answers"]["start"] == "2024-03-01"
        assert payload["answers"]["terms"] is False
