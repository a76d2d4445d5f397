"""Exportación YAML de la configuración de snapshots (Percy).

Por qué un Dumper propio:
- Los scripts multilínea se leen mejor como bloques literales (`|`).
- El script compartido se escribe una sola vez bajo `references` con un
  ancla (`&restore-page-state`) y cada paso lo referencia con un alias
  (`*restore-page-state`), igual que un YAML escrito a mano.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from core.domain.models import SnapshotConfig


class _NamedScript(str):
    """Script compartido; su ancla YAML es `anchor`."""

    anchor: str

    def __new__(cls, value: str, anchor: str) -> "_NamedScript":
        obj = super().__new__(cls, value)
        obj.anchor = anchor
        return obj


class SnapshotDumper(yaml.SafeDumper):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._anchor_names: dict[int, str] = {}

    def ignore_aliases(self, data: Any) -> bool:
        if isinstance(data, _NamedScript):
            return False
        return super().ignore_aliases(data)

    def generate_anchor(self, node: yaml.Node) -> str:
        return self._anchor_names.get(id(node)) or super().generate_anchor(node)


def _represent_str(dumper: SnapshotDumper, data: str) -> yaml.ScalarNode:
    style = "|" if "\n" in data else None
    return dumper.represent_scalar("tag:yaml.org,2002:str", data, style=style)


def _represent_named_script(dumper: SnapshotDumper, data: _NamedScript) -> yaml.ScalarNode:
    node = dumper.represent_scalar("tag:yaml.org,2002:str", str(data), style="|")
    dumper._anchor_names[id(node)] = data.anchor
    return node


SnapshotDumper.add_representer(str, _represent_str)
SnapshotDumper.add_representer(_NamedScript, _represent_named_script)


def _share_references(payload: dict[str, Any]) -> dict[str, Any]:
    """Sustituye cada uso de un script de `references` por el mismo objeto."""

    shared = {
        script: _NamedScript(script, anchor=name)
        for name, script in (payload.get("references") or {}).items()
    }
    if not shared:
        return payload

    payload["references"] = {name: shared[script] for name, script in payload["references"].items()}
    for snapshot in payload.get("snapshots", []):
        for step in snapshot.get("additionalSnapshots", []):
            execute = step.get("execute")
            if execute in shared:
                step["execute"] = shared[execute]
    return payload


def render_snapshot_yaml(config: SnapshotConfig) -> str:
    payload = _share_references(config.model_dump(by_alias=True))
    return yaml.dump(
        payload,
        Dumper=SnapshotDumper,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=4096,
    )


def export_snapshot_yaml(*, config: SnapshotConfig, output_path: Path, encoding: str = "utf-8") -> Path:
    """Escribe el YAML de snapshots de un documento y devuelve su ruta."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(render_snapshot_yaml(config), encoding=encoding)
    return output_path
