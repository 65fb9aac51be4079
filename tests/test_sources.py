"""Tests para las fuentes de esquemas."""

import asyncio
import json

import pytest
import yaml

from formwizard.errors import SchemaIntegrityError, SchemaSourceError
from formwizard.models import Identity
from formwizard.sources import FileSchemaSource, StaticSchemaSource, read_schema_file


@pytest.fixture
def schemas_dir(tmp_path, registration_payload, single_section_payload):
    """Directorio con un esquema por defecto y uno por identidad."""
    directory = tmp_path / "schemas"
    directory.mkdir()
    with open(directory / "default.json", "w", encoding="utf-8") as f:
        json.dump(registration_payload, f)
    with open(directory / "42.yaml", "w", encoding="utf-8") as f:
        yaml.safe_dump(single_section_payload, f)
    return directory


class TestReadSchemaFile:
    """Tests para read_schema_file."""

    def test_json(self, schemas_dir):
        data = read_schema_file(schemas_dir / "default.json")
        assert data["formId"] == "registration"

    def test_yaml(self, schemas_dir):
        data = read_schema_file(schemas_dir / "42.yaml")
        assert data["identifier"] == "feedback"

    def test_missing(self, tmp_path):
        with pytest.raises(SchemaSourceError, match="not found"):
            read_schema_file(tmp_path / "nope.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(SchemaSourceError, match="Could not read"):
            read_schema_file(path)

    def test_invalid_utf8(self, tmp_path):
        """Bytes que no son UTF-8 se reportan como error de la fuente."""
        path = tmp_path / "latin.json"
        path.write_bytes('{"formTitle": "Inscripción"}'.encode("latin-1"))
        with pytest.raises(SchemaSourceError, match="Could not read"):
            read_schema_file(path)


class TestFileSchemaSource:
    """Tests para FileSchemaSource."""

    def test_single_file(self, schemas_dir):
        source = FileSchemaSource(schemas_dir / "default.json")
        schema = asyncio.run(source.fetch_schema(None))
        assert schema.identifier == "registration"

    def test_directory_by_identity(self, schemas_dir):
        source = FileSchemaSource(schemas_dir)
        schema = asyncio.run(source.fetch_schema(Identity(roll_number="42")))
        assert schema.identifier == "feedback"

    def test_directory_falls_back_to_default(self, schemas_dir):
        source = FileSchemaSource(schemas_dir)
        assert source.resolve_path(Identity(roll_number="7")).name == "default.json"
        assert source.resolve_path(None).name == "default.json"

    def test_directory_without_schema(self, tmp_path):
        source = FileSchemaSource(tmp_path)
        with pytest.raises(SchemaSourceError, match="No schema for 7"):
            asyncio.run(source.fetch_schema(Identity(roll_number="7")))

    @pytest.mark.parametrize("roll_number", ["../default", "..", "sub/42"])
    def test_roll_number_cannot_leave_directory(self, schemas_dir, roll_number):
        """El número de lista no puede apuntar fuera del directorio de esquemas."""
        (schemas_dir.parent / "default.json").write_text("{}", encoding="utf-8")
        source = FileSchemaSource(schemas_dir)
        with pytest.raises(SchemaSourceError, match="Invalid schema name"):
            source.resolve_path(Identity(roll_number=roll_number))

    def test_invalid_schema_content(self, tmp_path):
        path = tmp_path / "form.json"
        path.write_text(json.dumps({"formTitle": "x", "formId": "x", "sections": []}), encoding="utf-8")
        with pytest.raises(SchemaIntegrityError):
            asyncio.run(FileSchemaSource(path).fetch_schema(None))


class TestStaticSchemaSource:
    """Tests para StaticSchemaSource."""

    def test_counts_calls(self, registration_payload):
        source = StaticSchemaSource(registration_payload)
        asyncio.run(source.fetch_schema(None))
        asyncio.run(source.fetch_schema(None))
        assert source.calls == 2
