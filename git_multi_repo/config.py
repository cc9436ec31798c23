"""
Configuration handling for git_multi_repo.

Defines the configuration schema and provides methods for loading/saving
the repository list from the JSON file in the user's home directory.
"""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigMalformedError, ConfigNotFoundError


# File name looked up relative to the home directory
CONFIG_FILE_NAME = ".git-multi-repo.json"


class RepoDescriptor(BaseModel):
    """A single git working copy to operate on."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(..., description="Name shown in the output")
    alias: str | None = Field(
        None, description="Optional alias shown next to the name"
    )
    # Not checked for existence here, failures surface per operation
    path: Path = Field(..., description="Path to the git working copy")

    @property
    def display_name(self) -> str:
        """Get the name, with the alias in parentheses when one is set."""
        if self.alias is not None:
            return f"{self.name} ({self.alias})"
        return self.name


class MultiRepoConfig(BaseModel):
    """Main configuration: the ordered list of repositories."""

    repos: list[RepoDescriptor] = Field(
        ..., description="Repositories to operate on, in output order"
    )

    @classmethod
    def from_json(cls, path: Path) -> "MultiRepoConfig":
        """Load configuration from a JSON file."""
        try:
            with open(path) as f:
                text = f.read()
        except OSError as e:
            raise ConfigNotFoundError(path, e.strerror) from e
        except UnicodeDecodeError as e:
            raise ConfigMalformedError(path, str(e)) from e

        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise ConfigMalformedError(path, _describe_validation_error(e)) from e

    def to_json(self, path: Path) -> None:
        """Save configuration to a JSON file."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(mode="json", exclude_none=True), f, indent=2)


def _describe_validation_error(error: ValidationError) -> str:
    """Summarize a pydantic error as 'location: message' pairs."""
    parts = []
    for err in error.errors():
        location = ".".join(str(loc) for loc in err["loc"]) or "<root>"
        parts.append(f"{location}: {err['msg']}")
    return "; ".join(parts)


def config_path(home: Path | str) -> Path:
    """Get the location of the config file for a home directory."""
    return Path(home) / CONFIG_FILE_NAME


def load_config(home: Path | str) -> MultiRepoConfig:
    """Load the repository list from the config file in `home`."""
    return MultiRepoConfig.from_json(config_path(home))
