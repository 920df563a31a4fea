"""
Configuration dataclass for tone rendering.
"""
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ToneConfig:
    """Configuration for ToneSession rendering."""
    reference_db: float = 110.0          # dB SPL mapped to digital gain 1.0
    max_gain: float = 1.5
    sample_rate: int = 44100
    sample_width: int = 2
    attack_time_constant: float = 0.05   # seconds, start/update smoothing
    release_time_constant: float = 0.1   # seconds, stop smoothing
    limiter_ceiling_dbfs: float = -1.0

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be positive, got {self.sample_rate}")
        if self.sample_width != 2:
            raise ValueError(f"only 16-bit output is supported, got sample_width={self.sample_width}")
        if self.attack_time_constant <= 0 or self.release_time_constant <= 0:
            raise ValueError("time constants must be positive")
        if not math.isfinite(self.reference_db):
            raise ValueError(f"reference_db must be finite, got {self.reference_db}")
        if not math.isfinite(self.max_gain) or self.max_gain <= 0:
            raise ValueError(f"max_gain must be finite and positive, got {self.max_gain}")
        if not math.isfinite(self.limiter_ceiling_dbfs) or self.limiter_ceiling_dbfs > 0:
            raise ValueError(
                f"limiter_ceiling_dbfs must be finite and at most 0 dBFS, got {self.limiter_ceiling_dbfs}"
            )

    @classmethod
    def from_settings(cls, settings: Optional[Dict[str, Any]]) -> 'ToneConfig':
        """Create ToneConfig from a settings dictionary with an optional "tone" section."""
        tone_cfg = (settings or {}).get("tone", {})

        return cls(
            reference_db=float(tone_cfg.get("reference_db", 110.0)),
            max_gain=float(tone_cfg.get("max_gain", 1.5)),
            sample_rate=int(tone_cfg.get("sample_rate", 44100)),
            sample_width=int(tone_cfg.get("sample_width", 2)),
            attack_time_constant=float(tone_cfg.get("attack_time_constant", 0.05)),
            release_time_constant=float(tone_cfg.get("release_time_constant", 0.1)),
            limiter_ceiling_dbfs=float(tone_cfg.get("limiter_ceiling_dbfs", -1.0)),
        )
