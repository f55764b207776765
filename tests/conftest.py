"""Shared test fixtures for envguard tests."""

from pathlib import Path

import pytest

from envguard.models.schema import EnvSchema, VariableSchema, VariableType

SAMPLE_ENV = """\
# Application
NODE_ENV=production
PORT=3000
DATABASE_URL=postgresql://db.internal:5432/app
JWT_SECRET=Zx9mQ2vL7pR4tY8wK3nB6cF1hJ5sD0gA
DEBUG=false
"""

SAMPLE_EXAMPLE = """\
NODE_ENV=development
PORT=8080
DATABASE_URL=postgresql://localhost:5432/dbname
JWT_SECRET=<your-jwt-secret>
DEBUG=false
"""

SAMPLE_SCHEMA_YAML = """\
variables:
  NODE_ENV:
    required: true
    type: string
    description: Application environment
    example: development
  PORT:
    type: number
    example: 3000
  DATABASE_URL:
    required: true
    type: url
    description: Database connection URL
  JWT_SECRET:
    required: true
    pattern: "^.{32,}$"
  DEBUG:
    type: boolean
    allowEmpty: true
  REDIS_URL:
    type: url
"""


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run every test in an empty directory with no user config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    return tmp_path


@pytest.fixture
def env_file(tmp_path: Path) -> Path:
    """Write the sample .env file."""
    path = tmp_path / ".env"
    path.write_text(SAMPLE_ENV)
    return path


@pytest.fixture
def example_file(tmp_path: Path) -> Path:
    """Write the sample .env.example file."""
    path = tmp_path / ".env.example"
    path.write_text(SAMPLE_EXAMPLE)
    return path


@pytest.fixture
def schema_file(tmp_path: Path) -> Path:
    """Write the sample schema as YAML."""
    path = tmp_path / "envguard.schema.yaml"
    path.write_text(SAMPLE_SCHEMA_YAML)
    return path


@pytest.fixture
def sample_schema() -> EnvSchema:
    """Schema object matching the sample schema file."""
    return EnvSchema(
        variables={
            "NODE_ENV": VariableSchema(
                required=True,
                type=VariableType.STRING,
                description="Application environment",
                example="development",
            ),
            "PORT": VariableSchema(type=VariableType.NUMBER, example="3000"),
            "DATABASE_URL": VariableSchema(
                required=True,
                type=VariableType.URL,
                description="Database connection URL",
            ),
            "JWT_SECRET": VariableSchema(required=True, pattern="^.{32,}$"),
            "DEBUG": VariableSchema(type=VariableType.BOOLEAN, allow_empty=True),
            "REDIS_URL": VariableSchema(type=VariableType.URL),
        }
    )


@pytest.fixture
def sample_env() -> str:
    """Contents of the sample .env file."""
    return SAMPLE_ENV
