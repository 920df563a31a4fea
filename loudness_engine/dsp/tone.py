"""
ToneSession: an explicitly owned sine-tone renderer for listening to a probe point.

A session is started with a frequency and a level in dB SPL, retargeted with
update(), rendered in chunks of any length and faded out with stop(). Gain and
frequency glide exponentially toward their targets and the oscillator phase
carries over between chunks, so consecutive renders join without clicks.
"""
import math
from typing import Optional

import numpy as np
from pydub import AudioSegment

from loudness_engine.config import ToneConfig
from loudness_engine.exceptions import AudioSessionError, InvalidInputError
from loudness_engine.utils.logger import get_logger, log_performance
from loudness_engine.validation import require_finite, require_frequency

logger = get_logger(__name__)


def level_to_gain(decibel_level: float, reference_db: float = 110.0, max_gain: float = 1.5) -> float:
    """
    Digital gain for a dB SPL level: 10 ** ((level - reference) / 20), capped at max_gain.

    reference_db maps to full scale; levels above it are allowed up to
    max_gain and tamed by the session's limiter.
    """
    decibel_level = require_finite(decibel_level, "decibel_level")
    return min(10 ** ((decibel_level - reference_db) / 20.0), max_gain)


class ToneSession:
    """
    Mono sine oscillator with smoothed gain and frequency, rendered to AudioSegments.
    """

    def __init__(self, config: Optional[ToneConfig] = None):
        self.config = config or ToneConfig()
        self._started = False
        self._playing = False
        self._closed = False

        self._frequency = 0.0
        self._target_frequency = 0.0
        self._gain = 0.0
        self._target_gain = 0.0
        self._time_constant = self.config.attack_time_constant
        self._phase = 0.0

    @property
    def is_playing(self) -> bool:
        return self._playing

    @property
    def is_closed(self) -> bool:
        return self._closed

    @property
    def frequency(self) -> float:
        return self._frequency

    @property
    def gain(self) -> float:
        return self._gain

    @property
    def target_gain(self) -> float:
        return self._target_gain

    def _check_open(self) -> None:
        if self._closed:
            raise AudioSessionError("ToneSession is closed")

    def _set_targets(self, frequency: float, decibel_level: float) -> None:
        self._target_frequency = require_frequency(frequency)
        self._target_gain = level_to_gain(
            decibel_level,
            reference_db=self.config.reference_db,
            max_gain=self.config.max_gain,
        )
        self._time_constant = self.config.attack_time_constant

    def start(self, frequency: float, decibel_level: float, immediate: bool = False) -> None:
        """
        Start (or restart) the tone. The gain rises from its current value,
        which is silence for a fresh session, unless immediate is set.
        """
        self._check_open()
        self._set_targets(frequency, decibel_level)

        if not self._started:
            self._frequency = self._target_frequency
        if immediate:
            self._frequency = self._target_frequency
            self._gain = self._target_gain

        self._started = True
        self._playing = True
        logger.debug(
            f"Tone started: {self._target_frequency:.1f} Hz at {decibel_level} dB SPL "
            f"(gain {self._target_gain:.5f})"
        )

    def update(self, frequency: float, decibel_level: float) -> None:
        """Glide a playing tone to a new frequency and level."""
        self._check_open()
        if not self._playing:
            raise AudioSessionError("ToneSession is not playing; call start() first")
        self._set_targets(frequency, decibel_level)

    def stop(self) -> None:
        """Fade the tone out. Rendering after stop() yields the decaying tail."""
        self._check_open()
        if not self._playing:
            return
        self._target_gain = 0.0
        self._time_constant = self.config.release_time_constant
        self._playing = False
        logger.debug("Tone stopped")

    def close(self) -> None:
        """Stop the tone and end the session's lifetime."""
        if self._closed:
            return
        if self._playing:
            self.stop()
        self._closed = True

    def render(self, duration_ms: float) -> AudioSegment:
        """
        Render the next duration_ms of audio as 16-bit mono.
        """
        self._check_open()
        if not self._started:
            raise AudioSessionError("ToneSession has not been started")

        duration_ms = require_finite(duration_ms, "duration_ms")
        if duration_ms < 0:
            raise InvalidInputError(f"duration_ms must not be negative, got {duration_ms}")

        sample_rate = self.config.sample_rate
        num_samples = int(round(sample_rate * duration_ms / 1000.0))
        if num_samples <= 0:
            return AudioSegment.silent(duration=0, frame_rate=sample_rate)

        steps = np.arange(1, num_samples + 1, dtype=np.float64)
        decay = np.exp(-steps / (self._time_constant * sample_rate))
        gains = self._target_gain + (self._gain - self._target_gain) * decay
        frequencies = self._target_frequency + (self._frequency - self._target_frequency) * decay

        increments = 2.0 * math.pi * frequencies / sample_rate
        phases = self._phase + np.cumsum(increments) - increments
        samples = np.sin(phases) * gains

        # Hard limiter at the configured ceiling
        ceiling = 10 ** (self.config.limiter_ceiling_dbfs / 20.0)
        samples = np.clip(samples, -ceiling, ceiling)
        samples = np.clip(samples, -1.0, 1.0)  # int16 range

        self._phase = float((phases[-1] + increments[-1]) % (2.0 * math.pi))
        self._gain = float(gains[-1])
        self._frequency = float(frequencies[-1])

        pcm = np.round(samples * 32767).astype(np.int16)
        return AudioSegment(
            data=pcm.tobytes(),
            sample_width=self.config.sample_width,
            frame_rate=sample_rate,
            channels=1,
        )

    def __enter__(self) -> 'ToneSession':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


@log_performance
def render_tone(
    frequency: float,
    decibel_level: float,
    duration_ms: float,
    config: Optional[ToneConfig] = None,
    fade_in: bool = True
) -> AudioSegment:
    """
    Render a steady tone in one call.

    Args:
        frequency: Tone frequency in Hz
        decibel_level: Level in dB SPL
        duration_ms: Length of the rendered audio
        config: Optional ToneConfig
        fade_in: Glide in from silence instead of starting at full level

    Returns:
        16-bit mono AudioSegment
    """
    with ToneSession(config) as session:
        session.start(frequency, decibel_level, immediate=not fade_in)
        return session.render(duration_ms)
