"""Catalogue of report kinds that can be rendered to PDF."""
from __future__ import annotations

from pathlib import Path

import yaml

from inspection_portal.domain import ReportKind

CONFIG_DIR = Path(__file__).resolve().parent.parent / "config"

_BUILTIN_CATALOGUE: dict = {
    "default": "WorkOrder",
    "kinds": {
        "WorkOrder": {
            "path": "/{locale}/dashboard/documents/work-orders/generate-pdf/{id}?preview=true",
            "file_prefix": "WorkOrder",
            "aliases": ["workorder", "work-order", "default"],
        },
        "Inspection": {
            "path": "/{locale}/dashboard/documents/inspections/generate-pdf/{id}?preview=true",
            "file_prefix": "Inspection",
            "aliases": ["liftgate", "inspection"],
        },
    },
}


class ReportCatalogue:
    """Resolves the ``type`` query value of the PDF endpoint to a :class:`ReportKind`.

    Unknown or empty values resolve to the default kind.
    """

    def __init__(self, kinds: list[ReportKind], default: str) -> None:
        if not kinds:
            raise ValueError("report catalogue must define at least one kind")
        by_name = {kind.name: kind for kind in kinds}
        if default not in by_name:
            raise ValueError(f"default report kind {default!r} is not defined")
        self._default = by_name[default]
        self._lookup: dict[str, ReportKind] = {}
        for kind in kinds:
            self._lookup[kind.name.lower()] = kind
            for alias in kind.aliases:
                self._lookup[alias.lower()] = kind

    @classmethod
    def from_mapping(cls, data: dict) -> "ReportCatalogue":
        kinds: list[ReportKind] = []
        for name, entry in (data.get("kinds") or {}).items():
            kinds.append(
                ReportKind(
                    name=str(name),
                    path_template=str(entry["path"]),
                    file_prefix=str(entry.get("file_prefix") or name),
                    aliases=tuple(str(alias) for alias in entry.get("aliases") or ()),
                )
            )
        default = str(data.get("default") or (kinds[0].name if kinds else ""))
        return cls(kinds, default)

    def resolve(self, value: str | None) -> ReportKind:
        if not value:
            return self._default
        return self._lookup.get(value.strip().lower(), self._default)


def _load_catalogue_data() -> dict:
    path = CONFIG_DIR / "report_kinds.yaml"
    if not path.exists():
        return _BUILTIN_CATALOGUE
    with path.open("r", encoding="utf-8") as fp:
        return yaml.safe_load(fp) or _BUILTIN_CATALOGUE


REPORT_CATALOGUE = ReportCatalogue.from_mapping(_load_catalogue_data())


def get_report_catalogue() -> ReportCatalogue:
    return REPORT_CATALOGUE
