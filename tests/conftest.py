"""Configuración de pytest para tests de formwizard."""

import pytest

from formwizard.models import FormSchema, load_schema


@pytest.fixture
def registration_payload():
    """Formulario de registro de dos secciones en formato de transporte (camelCase)."""
    return {
        "formTitle": "Student Registration",
        "formId": "registration",
        "version": "1.2",
        "sections": [
            {
                "sectionId": 1,
                "title": "Personal",
                "description": "Basic details",
                "fields": [
                    {
                        "fieldId": "name",
                        "type": "text",
                        "label": "Full Name",
                        "required": True,
                        "minLength": 3,
                        "maxLength": 40,
                        "dataTestId": "name-input",
                    },
                    {
                        "fieldId": "email",
                        "type": "email",
                        "label": "Email",
                        "required": True,
                        "validation": {"message": "We need your email"},
                    },
                    {
                        "fieldId": "phone",
                        "type": "tel",
                        "label": "Phone",
                    },
                ],
            },
            {
                "sectionId": 2,
                "title": "Preferences",
                "fields": [
                    {
                        "fieldId": "course",
                        "type": "dropdown",
                        "label": "Course",
                        "required": True,
                        "options": [
                            {"value": "math", "label": "Mathematics"},
                            {"value": "bio", "label": "Biology"},
                        ],
                    },
                    {
                        "fieldId": "shift",
                        "type": "radio",
                        "label": "Shift",
                        "options": [
                            {"value": "am", "label": "Morning"},
                            {"value": "pm", "label": "Evening"},
                        ],
                    },
                    {
                        "fieldId": "start",
                        "type": "date",
                        "label": "Start Date",
                    },
                    {
                        "fieldId": "notes",
                        "type": "textarea",
                        "label": "Notes",
                    },
                    {
                        "fieldId": "terms",
                        "type": "checkbox",
                        "label": "Accept terms",
                        "required": True,
                    },
                ],
            },
        ],
    }


@pytest.fixture
def registration_schema(registration_payload) -> FormSchema:
    """Esquema de registro ya cargado."""
    return load_schema(registration_payload)


@pytest.fixture
def single_section_payload():
    """Formulario de una sola sección (snake_case)."""
    return {
        "title": "Feedback",
        "identifier": "feedback",
        "sections": [
            {
                "id": "only",
                "title": "Feedback",
                "fields": [
                    {"id": "comment", "type": "text", "label": "Comment", "required": True},
                    {"id": "subscribe", "type": "checkbox", "label": "Subscribe"},
                ],
            },
        ],
    }


@pytest.fixture
def single_section_schema(single_section_payload) -> FormSchema:
    """Esquema de una sola sección ya cargado."""
    return load_schema(single_section_payload)

