"""Unit tests for starter file templates."""

import pytest

from envguard.core.parser import parse_file
from envguard.core.schema_loader import load_schema
from envguard.templates import (
    create_config_template,
    create_example_template,
    create_schema_template,
)
from envguard.utils.config import load_config
from envguard.utils.errors import EnvGuardError


class TestSchemaTemplate:
    """Tests for create_schema_template."""

    def test_creates_loadable_schema(self, tmp_path):
        """Test the written schema loads."""
        path = create_schema_template(tmp_path / "envguard.schema.yaml")
        schema = load_schema(path)

        assert schema.required_keys == ["NODE_ENV", "DATABASE_URL", "JWT_SECRET"]
        assert schema.variables["PORT"].example == "3000"
        assert schema.rules[0].name == "no-unresolved-markers"
        assert schema.security_rules[0].name == "weak-jwt-secret"

    def test_marker_rule(self, tmp_path):
        """Test the marker rule pattern only rejects marked values."""
        rule = load_schema(create_schema_template(tmp_path / "s.yaml")).rules[0]

        assert rule.pattern.search("production")
        assert not rule.pattern.search("TODO: fill in")

    def test_default_path(self, isolated_cwd):
        path = create_schema_template()
        assert path.name == "envguard.schema.yaml"
        assert (isolated_cwd / "envguard.schema.yaml").exists()


class TestConfigTemplate:
    """Tests for create_config_template."""

    def test_creates_loadable_config(self, tmp_path):
        """Test the written config loads."""
        config = load_config(create_config_template(tmp_path / "envguard.config.yaml"))

        assert config.schema_file == "envguard.schema.yaml"
        assert config.example_file == ".env.example"
        assert config.custom_rules[0].name == "no-localhost-in-prod"
        assert config.security_rules[0].name == "no-hardcoded-passwords"

    def test_localhost_rule(self, tmp_path):
        """Test the localhost rule only rejects local URLs."""
        rule = load_config(create_config_template(tmp_path / "c.yaml")).custom_rules[0]

        assert rule.pattern.search("https://api.example.com")
        assert not rule.pattern.search("http://localhost:3000")
        assert not rule.pattern.search("http://127.0.0.1:8080")


class TestExampleTemplate:
    """Tests for create_example_template."""

    def test_parses_cleanly(self, tmp_path):
        """Test the example file has no malformed lines."""
        parsed = parse_file(create_example_template(tmp_path / ".env.example"))

        assert not parsed.has_errors
        assert len(parsed.variables) == 21
        assert parsed.duplicate_keys == []
        assert parsed.as_dict()["PORT"] == "3000"


class TestOverwrite:
    """Tests for overwrite protection."""

    @pytest.mark.parametrize(
        "create", [create_schema_template, create_config_template, create_example_template]
    )
    def test_refuses_existing_file(self, tmp_path, create):
        """Test an existing file is kept without force."""
        path = tmp_path / "existing"
        path.write_text("keep me")

        with pytest.raises(EnvGuardError) as exc_info:
            create(path)

        assert exc_info.value.code == "FILE_EXISTS"
        assert path.read_text() == "keep me"

    def test_force_overwrites(self, tmp_path):
        path = tmp_path / ".env.example"
        path.write_text("OLD=1\n")

        create_example_template(path, force=True)

        assert "OLD=1" not in path.read_text()
