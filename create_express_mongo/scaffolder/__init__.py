"""create-express-mongo scaffolder -- decides what gets written where.

The catalog turns a ``ProjectConfig`` into ``{relative_path: content}``
mappings, the materializer writes them, and the frontend helpers edit the
files that ``create vite`` produces.  ``GenerationPlan`` describes the
ordered steps the assembler executes.

Quick usage::

    from create_express_mongo.config import ProjectConfig
    from create_express_mongo.scaffolder import backend_files, materialize

    config = ProjectConfig(name="demo")
    await materialize("/tmp/demo", backend_files(config))
"""

from .catalog import SOURCE_DIRECTORIES, SOURCE_SLOTS, backend_files, root_files
from .frontend import InsertStatus, ProxyInsertion, insert_proxy_block, vite_template
from .materializer import FileEntry, ensure_directories, materialize
from .plan import AssemblyState, GenerationPlan, Stage
from .templates import TemplateRenderer

__all__ = [
    "AssemblyState",
    "FileEntry",
    "GenerationPlan",
    "InsertStatus",
    "ProxyInsertion",
    "SOURCE_DIRECTORIES",
    "SOURCE_SLOTS",
    "Stage",
    "TemplateRenderer",
    "backend_files",
    "ensure_directories",
    "insert_proxy_block",
    "materialize",
    "root_files",
    "vite_template",
]
