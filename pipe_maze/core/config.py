from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple


@dataclass
class AnalysisParams:
    # Derive the origin's two real connections instead of treating 'S' as a cross
    infer_origin: bool = True
    # Supersampled coordinate the exterior fill starts from
    exterior_seed: Tuple[int, int] = (0, 0)
    check_consistency: bool = True
