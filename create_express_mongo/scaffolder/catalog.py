"""Template catalog: configuration in, ``{relative_path: content}`` out.

Every function here is pure.  Templates are read from the package, but
nothing touches the target directory; the materializer does the writing.
"""

from __future__ import annotations

from typing import Any

from ..config import ProjectConfig, Settings
from ..utils import dump_json
from .templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Backend layout
# ---------------------------------------------------------------------------

#: Structural directories under ``src/``; each holds exactly one file.
SOURCE_DIRECTORIES: tuple[str, ...] = (
    "controllers",
    "db",
    "middlewares",
    "models",
    "routes",
    "utils",
)

#: Source slot -> path stem under the backend root (and under ``backend/`` in
#: the template directory).  The extension is appended per variant.
SOURCE_SLOTS: dict[str, str] = {
    "entry_point": "src/index",
    "app": "src/app",
    "constants": "src/constants",
    "db_connect": "src/db/db",
    "router": "src/routes/example.routes",
    "controller": "src/controllers/example.controller",
    "model": "src/models/example.model",
    "middleware": "src/middlewares/logger",
    "util": "src/utils/sample.util",
}

#: Output file -> template for the static project-root files.
_ROOT_FILE_TEMPLATES: dict[str, str] = {
    ".gitignore": "backend/gitignore.j2",
    ".env": "backend/env.j2",
    ".env.sample": "backend/env.sample.j2",
    ".prettierrc": "backend/prettierrc.j2",
    ".prettierignore": "backend/prettierignore.j2",
    "Readme.md": "backend/Readme.md.j2",
}

_SAMPLE_DATABASE = "myapp"

RUNTIME_DEPENDENCIES: dict[str, str] = {
    "cors": "^2.8.5",
    "dotenv": "^16.0.3",
    "express": "^4.18.2",
    "mongoose": "^7.0.3",
}

_PLAIN_DEV_DEPENDENCIES: dict[str, str] = {
    "nodemon": "^2.0.22",
}

_TYPED_DEV_DEPENDENCIES: dict[str, str] = {
    "typescript": "^5.0.4",
    "@types/node": "^20.2.5",
    "@types/express": "^4.17.17",
    "@types/cors": "^2.8.13",
    "@types/mongoose": "^5.11.97",
    "ts-node": "^10.9.1",
    "nodemon": "^2.0.22",
}

_TSCONFIG: dict[str, Any] = {
    "compilerOptions": {
        "target": "ES2020",
        "module": "ESNext",
        "moduleResolution": "node",
        "outDir": "dist",
        "rootDir": "src",
        "strict": True,
        "esModuleInterop": True,
        "forceConsistentCasingInFileNames": True,
        "skipLibCheck": True,
        "resolveJsonModule": True,
    },
    "include": ["src/**/*"],
    "exclude": ["node_modules", "dist"],
}


def source_path(slot: str, config: ProjectConfig) -> str:
    """Relative output path of a source slot for the configured variant."""
    return f"{SOURCE_SLOTS[slot]}.{config.source_extension}"


def backend_context(config: ProjectConfig, settings: Settings) -> dict[str, Any]:
    """Build the Jinja2 context shared by every backend template."""
    return {
        "project_name": config.name,
        "typed": config.is_typed,
        "import_ext": "" if config.is_typed else ".js",
        "backend_port": settings.backend_port,
        "api_prefix": settings.api_prefix,
        "mongo_uri": settings.mongo_uri(config.database_name),
        "sample_mongo_uri": settings.mongo_uri(_SAMPLE_DATABASE),
    }


def backend_manifest(config: ProjectConfig) -> dict[str, Any]:
    """The backend ``package.json`` as a dict.

    Scripts, entry point and dev dependencies are all decided by the single
    language flag.
    """
    if config.is_typed:
        main = "dist/index.js"
        scripts = {
            "build": "tsc",
            "dev": "nodemon --watch 'src/**/*.ts' --exec 'ts-node' src/index.ts",
            "start": "node dist/index.js",
        }
        dev_dependencies = dict(_TYPED_DEV_DEPENDENCIES)
    else:
        main = "src/index.js"
        scripts = {
            "dev": "nodemon src/index.js",
            "start": "node src/index.js",
        }
        dev_dependencies = dict(_PLAIN_DEV_DEPENDENCIES)

    return {
        "name": config.backend_package_name,
        "version": "1.0.0",
        "type": "module",
        "main": main,
        "scripts": scripts,
        "dependencies": dict(RUNTIME_DEPENDENCIES),
        "devDependencies": dev_dependencies,
    }


def backend_files(
    config: ProjectConfig,
    settings: Settings | None = None,
    renderer: TemplateRenderer | None = None,
) -> dict[str, str]:
    """Return every file of the backend sub-project, keyed by relative path."""
    settings = settings or Settings()
    renderer = renderer or TemplateRenderer()
    ctx = backend_context(config, settings)

    files: dict[str, str] = {
        path: renderer.render(template, ctx)
        for path, template in _ROOT_FILE_TEMPLATES.items()
    }
    files["package.json"] = dump_json(backend_manifest(config))
    if config.is_typed:
        files["tsconfig.json"] = dump_json(_TSCONFIG)

    for slot, stem in SOURCE_SLOTS.items():
        files[source_path(slot, config)] = renderer.render(f"backend/{stem}.j2", ctx)

    return files


# ---------------------------------------------------------------------------
# Monorepo root
# ---------------------------------------------------------------------------


def root_manifest(config: ProjectConfig, settings: Settings | None = None) -> dict[str, Any]:
    """The workspace ``package.json`` placed at the project root."""
    pm = (settings or Settings()).package_manager
    if config.is_full_stack:
        workspaces = ["frontend", "backend"]
        scripts = {
            "dev": f'concurrently "{pm} run dev:backend" "{pm} run dev:frontend"',
            "dev:backend": f"cd backend && {pm} run dev",
            "dev:frontend": f"cd frontend && {pm} run dev",
            "start": f"cd backend && {pm} start",
        }
    else:
        workspaces = ["backend"]
        scripts = {
            "dev": f"cd backend && {pm} run dev",
            "start": f"cd backend && {pm} start",
        }

    return {
        "name": config.name,
        "version": "1.0.0",
        "private": True,
        "workspaces": workspaces,
        "scripts": scripts,
        "devDependencies": {
            "concurrently": "^8.0.1",
        },
    }


def root_files(
    config: ProjectConfig,
    settings: Settings | None = None,
    renderer: TemplateRenderer | None = None,
) -> dict[str, str]:
    """Return the monorepo coordination files (manifest and readme)."""
    settings = settings or Settings()
    renderer = renderer or TemplateRenderer()
    ctx = {
        "project_name": config.name,
        "full_stack": config.is_full_stack,
        "frontend": config.frontend.value if config.frontend else "",
        "package_manager": settings.package_manager,
    }
    return {
        "package.json": dump_json(root_manifest(config, settings)),
        "README.md": renderer.render("root/README.md.j2", ctx),
    }
