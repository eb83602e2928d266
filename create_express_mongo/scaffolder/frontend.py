"""Frontend sub-project helpers.

The frontend tree itself comes from ``create vite``; this module only picks
the Vite template for a framework and edits two of the files Vite produced:
the dev-server proxy in ``vite.config.*`` and the name in ``package.json``.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..config import FrontendFramework
from ..errors import TransformationError
from ..utils import load_json, save_json


VITE_TEMPLATES: dict[FrontendFramework, str] = {
    FrontendFramework.REACT: "react",
    FrontendFramework.VUE: "vue",
    FrontendFramework.SVELTE: "svelte",
}

#: Line after which the ``server`` block is inserted.
CONFIG_ANCHOR = "export default defineConfig({"

#: Config files Vite may generate, in lookup order.
VITE_CONFIG_NAMES: tuple[str, ...] = ("vite.config.js", "vite.config.ts", "vite.config.mjs")


def vite_template(framework: FrontendFramework) -> str:
    """Return the ``--template`` value for *framework*."""
    return VITE_TEMPLATES[framework]


# ---------------------------------------------------------------------------
# Dev-server proxy insertion
# ---------------------------------------------------------------------------


class InsertStatus(str, Enum):
    INSERTED = "inserted"
    ALREADY_PRESENT = "already_present"
    MARKER_NOT_FOUND = "marker_not_found"


@dataclass(frozen=True)
class ProxyInsertion:
    """Outcome of :func:`insert_proxy_block`.

    ``content`` is the edited text when ``status`` is ``INSERTED`` and the
    untouched input otherwise.
    """

    status: InsertStatus
    content: str

    @property
    def changed(self) -> bool:
        return self.status is InsertStatus.INSERTED


def proxy_block(target: str, prefix: str = "/api", indent: str = "  ") -> list[str]:
    """Lines of the ``server.proxy`` block, indented one level."""
    return [
        f"{indent}server: {{",
        f"{indent}  proxy: {{",
        f"{indent}    '{prefix}': {{",
        f"{indent}      target: '{target}',",
        f"{indent}      changeOrigin: true,",
        f"{indent}    }},",
        f"{indent}  }},",
        f"{indent}}},",
    ]


def insert_proxy_block(text: str, target: str, prefix: str = "/api") -> ProxyInsertion:
    """Insert a dev-server proxy right after the ``defineConfig({`` marker.

    The document is treated line by line.  When the marker shares its line
    with other code, that line is split after the marker and the remainder
    moves below the block.  The block is indented one level deeper than the
    marker line.  Running it on already-patched content is a no-op.
    """
    lines = text.splitlines(keepends=True)
    anchor_index = next(
        (i for i, line in enumerate(lines) if CONFIG_ANCHOR in line),
        None,
    )
    if anchor_index is None:
        return ProxyInsertion(InsertStatus.MARKER_NOT_FOUND, text)

    anchor = lines[anchor_index]
    split_at = anchor.index(CONFIG_ANCHOR) + len(CONFIG_ANCHOR)
    head, rest = anchor[:split_at], anchor[split_at:]

    # A proxy entry for the prefix anywhere after the marker means we ran before.
    tail = rest + "".join(lines[anchor_index + 1:])
    if f"'{prefix}':" in tail and "proxy:" in tail:
        return ProxyInsertion(InsertStatus.ALREADY_PRESENT, text)

    base_indent = anchor[: len(anchor) - len(anchor.lstrip())]
    inner_indent = base_indent + "  "
    newline = "\r\n" if anchor.endswith("\r\n") else "\n"

    replacement = [head + newline]
    replacement += [line + newline for line in proxy_block(target, prefix, inner_indent)]
    if rest.strip():
        replacement.append(inner_indent + rest.lstrip())
    lines[anchor_index:anchor_index + 1] = replacement
    return ProxyInsertion(InsertStatus.INSERTED, "".join(lines))


def find_vite_config(frontend_root: Path) -> Path | None:
    for name in VITE_CONFIG_NAMES:
        candidate = frontend_root / name
        if candidate.is_file():
            return candidate
    return None


async def patch_vite_config(
    frontend_root: Path, target: str, prefix: str = "/api"
) -> ProxyInsertion:
    """Add the API proxy to the Vite config found in *frontend_root*.

    The file is rewritten only when the block was actually inserted.

    Raises:
        TransformationError: If no config file exists or the marker is
            missing.  The file is left untouched in both cases.
    """
    config_path = find_vite_config(frontend_root)
    if config_path is None:
        raise TransformationError(
            frontend_root / VITE_CONFIG_NAMES[0], "no Vite config file was generated"
        )

    text = await asyncio.to_thread(config_path.read_text, "utf-8")
    result = insert_proxy_block(text, target, prefix)
    if result.status is InsertStatus.MARKER_NOT_FOUND:
        raise TransformationError(config_path, f"marker {CONFIG_ANCHOR!r} not found")
    if result.changed:
        await asyncio.to_thread(config_path.write_text, result.content, "utf-8")
    return result


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------


async def rename_frontend_manifest(frontend_root: Path, package_name: str) -> Path:
    """Set the ``name`` field of the generated ``package.json``."""
    manifest_path = frontend_root / "package.json"
    manifest = await asyncio.to_thread(load_json, manifest_path)
    manifest["name"] = package_name
    await save_json(manifest, manifest_path)
    return manifest_path
