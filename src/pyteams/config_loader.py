"""Persist and load CLI roster column profiles."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict


@dataclass
class MappingProfile:
    roster_mapping: Dict[str, str]

    @classmethod
    def load(cls, path: Path) -> "MappingProfile":
        data = json.loads(path.read_text(encoding="utf-8"))
        return cls(roster_mapping=data.get("roster_mapping", {}))

    def save(self, path: Path) -> None:
        payload = {"roster_mapping": self.roster_mapping}
        path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
