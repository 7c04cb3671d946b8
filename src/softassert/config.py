from __future__ import annotations

from pathlib import Path

import yaml
from expandvars import expandvars
from pydantic import BaseModel, ConfigDict, field_validator, model_validator


class ScriptConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str
    path: str
    env: dict[str, str] = {}

    @field_validator("name")
    @classmethod
    def name_must_be_path_safe(cls, v: str) -> str:
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Script name '{v}' must be non-empty and contain no slashes")
        return v

    @model_validator(mode="after")
    def validate_env_variables(self) -> "ScriptConfig":
        """Validate that all ${VAR} references without defaults are set.

        Raises ValueError listing every missing variable so the user can fix them
        all at once rather than hitting them one-by-one mid-run.
        """
        missing: list[str] = []
        for key, value in self.env.items():
            try:
                expandvars(value, nounset=True)
            except Exception:
                # Variable is missing and has no default
                missing.append(f"  {key}={value}")

        if missing:
            details = "\n".join(missing)
            raise ValueError(
                f"Script '{self.name}' has missing environment variables:\n{details}"
            )

        return self

    def resolved_env(self) -> dict[str, str]:
        return {key: expandvars(value) for key, value in self.env.items()}


class SuiteConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")
    scripts: list[ScriptConfig]

    @field_validator("scripts")
    @classmethod
    def scripts_must_be_unique(cls, v: list[ScriptConfig]) -> list[ScriptConfig]:
        if not v:
            raise ValueError("scripts must not be empty")
        seen: set[str] = set()
        for script in v:
            if script.name in seen:
                raise ValueError(f"Duplicate script name '{script.name}'")
            seen.add(script.name)
        return v


def load_config(path: Path) -> SuiteConfig:
    """Load and validate a suite config from a YAML file."""
    config_dir = path.parent.resolve()

    with open(path) as f:
        raw = yaml.safe_load(f)

    if not isinstance(raw, dict):
        raise ValueError(f"{path} does not contain a YAML mapping")

    config = SuiteConfig(**raw)

    # Resolve relative script paths relative to config file location
    for script in config.scripts:
        script_path = Path(script.path)
        if not script_path.is_absolute():
            script.path = str((config_dir / script_path).resolve())

    return config
