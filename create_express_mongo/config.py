"""create-express-mongo configuration.

Two typed Pydantic v2 models live here:

* ``Settings`` -- tool-level knobs (package manager, ports, scaffolding-tool
  package) that can be overridden with ``CEM_*`` environment variables.
* ``ProjectConfig`` -- the immutable record describing *what* to generate,
  produced once per run by the resolver.
"""

from __future__ import annotations

import os
import re
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# ---------------------------------------------------------------------------
# Choice sets
# ---------------------------------------------------------------------------


class ProjectMode(str, Enum):
    FULL_STACK = "Full-Stack"
    BACKEND_ONLY = "Backend Only"


class LanguageVariant(str, Enum):
    JAVASCRIPT = "JavaScript"
    TYPESCRIPT = "TypeScript"


class FrontendFramework(str, Enum):
    REACT = "React"
    VUE = "Vue"
    SVELTE = "Svelte"


# ---------------------------------------------------------------------------
# Tool settings
# ---------------------------------------------------------------------------


class Settings(BaseModel):
    """Tool-wide settings.

    Defaults reproduce the stock layout: npm, an Express server on port 5000
    and a local MongoDB on 27017.
    """

    output_dir: Path = Field(default=Path("."))
    package_manager: str = Field(default="npm", min_length=1)
    backend_port: int = Field(default=5000, ge=1, le=65535)
    mongo_host: str = Field(default="localhost", min_length=1)
    mongo_port: int = Field(default=27017, ge=1, le=65535)
    vite_package: str = Field(default="vite@latest", min_length=1)
    api_prefix: str = Field(default="/api")

    @property
    def backend_url(self) -> str:
        """Address the frontend dev server proxies API calls to."""
        return f"http://localhost:{self.backend_port}"

    def mongo_uri(self, database: str) -> str:
        return f"mongodb://{self.mongo_host}:{self.mongo_port}/{database}"

    @property
    def install_command(self) -> str:
        return f"{self.package_manager} install"

    def vite_command(self, template: str) -> str:
        """Command that initialises a Vite project in the current directory."""
        return f"{self.package_manager} create {self.vite_package} . -- --template {template}"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build ``Settings`` from environment variables.

        Recognised variables (all optional):
            CEM_OUTPUT_DIR, CEM_PACKAGE_MANAGER, CEM_BACKEND_PORT,
            CEM_MONGO_HOST, CEM_MONGO_PORT, CEM_VITE_PACKAGE.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("CEM_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["CEM_OUTPUT_DIR"])
        if os.environ.get("CEM_PACKAGE_MANAGER"):
            kwargs["package_manager"] = os.environ["CEM_PACKAGE_MANAGER"]
        if os.environ.get("CEM_BACKEND_PORT"):
            kwargs["backend_port"] = int(os.environ["CEM_BACKEND_PORT"])
        if os.environ.get("CEM_MONGO_HOST"):
            kwargs["mongo_host"] = os.environ["CEM_MONGO_HOST"]
        if os.environ.get("CEM_MONGO_PORT"):
            kwargs["mongo_port"] = int(os.environ["CEM_MONGO_PORT"])
        if os.environ.get("CEM_VITE_PACKAGE"):
            kwargs["vite_package"] = os.environ["CEM_VITE_PACKAGE"]
        return cls(**kwargs)


# ---------------------------------------------------------------------------
# Project configuration
# ---------------------------------------------------------------------------


def database_name(project_name: str) -> str:
    """Lowercase the name and collapse whitespace runs into hyphens.

    ``"Demo App"`` -> ``"demo-app"``.
    """
    return re.sub(r"\s+", "-", project_name.lower())


class ProjectConfig(BaseModel):
    """Immutable description of the project to generate."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Project name, used verbatim for directories and manifests")
    mode: ProjectMode = Field(default=ProjectMode.BACKEND_ONLY)
    language: LanguageVariant = Field(default=LanguageVariant.JAVASCRIPT)
    frontend: FrontendFramework | None = Field(
        default=None,
        description="Frontend framework; required for full-stack projects only",
    )

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("project name must not be empty")
        return value

    @model_validator(mode="after")
    def _frontend_matches_mode(self) -> "ProjectConfig":
        if self.mode is ProjectMode.FULL_STACK and self.frontend is None:
            raise ValueError("a full-stack project needs a frontend framework")
        if self.mode is ProjectMode.BACKEND_ONLY and self.frontend is not None:
            raise ValueError("a backend-only project cannot have a frontend framework")
        return self

    # -- Derived values ------------------------------------------------------

    @property
    def is_full_stack(self) -> bool:
        return self.mode is ProjectMode.FULL_STACK

    @property
    def is_typed(self) -> bool:
        return self.language is LanguageVariant.TYPESCRIPT

    @property
    def source_extension(self) -> str:
        return "ts" if self.is_typed else "js"

    @property
    def database_name(self) -> str:
        return database_name(self.name)

    @property
    def backend_package_name(self) -> str:
        return f"{self.name}-backend"

    @property
    def frontend_package_name(self) -> str:
        return f"{self.name}-frontend"
