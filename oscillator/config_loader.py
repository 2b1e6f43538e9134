from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Union
import json

import yaml

from .bars import Periods

ConfigDict = Dict[str, Any]

DEFAULT_PERIODS = (14, 3)

@dataclass(frozen=True)
class IndicatorSpec:
    raw: ConfigDict
    path: str

    @property
    def name(self) -> str:
        return self.raw.get("indicator", {}).get("name", "stochastic")

    @property
    def data_path(self) -> Union[str, None]:
        return self.raw.get("data", {}).get("path")

def load_config(path: Union[str, Path]) -> IndicatorSpec:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config not found: {p}")
    ext = p.suffix.lower()

    if ext in [".yaml", ".yml"]:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    elif ext == ".json":
        raw = json.loads(p.read_text(encoding="utf-8"))
    else:
        raise ValueError(f"Unsupported config extension: {ext}")

    if not isinstance(raw, dict):
        raise ValueError("Config root must be an object/dict")
    return IndicatorSpec(raw=raw, path=str(p))

def get_periods(spec: IndicatorSpec) -> Periods:
    st = spec.raw.get("indicator", {}).get("stochastic", {}) or {}
    periods = st.get("periods")
    if periods is not None:
        if not isinstance(periods, (list, tuple)) or len(periods) != 2:
            raise ValueError(f"indicator.stochastic.periods must be [k, d], got {periods!r}")
        return Periods(period_k=periods[0], period_d=periods[1])
    return Periods(
        period_k=st.get("period_k", DEFAULT_PERIODS[0]),
        period_d=st.get("period_d", DEFAULT_PERIODS[1]),
    )
