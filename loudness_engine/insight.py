"""
Insight text for a probe point.

The text itself comes from a pluggable provider (typically a hosted language
model). Provider failures never reach the caller: they are logged and replaced
by a fixed fallback message.
"""
from typing import Callable, Optional

from loudness_engine.contours import REFERENCE_FREQUENCY
from loudness_engine.utils.logger import get_logger

logger = get_logger(__name__)


InsightProvider = Callable[[str], Optional[str]]

MISSING_PROVIDER_MESSAGE = (
    "No insight provider is configured. Unable to generate insights for this point."
)
FALLBACK_MESSAGE = (
    "Unable to retrieve insights at this moment. Try exploring other frequencies."
)

PROMPT_TEMPLATE = """\
Act as a professor of psychoacoustics.
The user is exploring the Fletcher-Munson (equal-loudness) curves.
They have selected a point on the graph:
- Frequency: {frequency:g} Hz
- Sound pressure level: {decibel_level:.1f} dB SPL
- Approximate loudness level: {phon:.1f} phon

Explain what a human perceives at this specific point.
- Is it audible?
- Does it feel "bass heavy", "piercing", or "faint"?
- Why is the ear more or less sensitive here compared to 1000 Hz?
- Mention any relevant real-world sounds that occupy this range (e.g. thunder, mosquito, speech).

Keep the response concise (under 80 words), engaging, and educational. \
Do not use markdown formatting, just plain text."""


def build_insight_prompt(frequency: float, decibel_level: float, phon: float) -> str:
    return PROMPT_TEMPLATE.format(frequency=frequency, decibel_level=decibel_level, phon=phon)


class InsightService:
    """
    Wraps an insight provider so that callers always get a sentence back.
    """

    def __init__(self, provider: Optional[InsightProvider] = None):
        self.provider = provider

    def get_insight(self, frequency: float, decibel_level: float, phon: float) -> str:
        if self.provider is None:
            return MISSING_PROVIDER_MESSAGE

        prompt = build_insight_prompt(frequency, decibel_level, phon)
        try:
            text = self.provider(prompt)
        except Exception as exc:
            logger.warning(f"Insight provider failed for {frequency:g} Hz / {decibel_level:.1f} dB: {exc}")
            return FALLBACK_MESSAGE

        if not text or not str(text).strip():
            logger.warning("Insight provider returned no text")
            return FALLBACK_MESSAGE
        return str(text).strip()


def _band_name(frequency: float) -> str:
    if frequency < 60:
        return "sub-bass"
    if frequency < 250:
        return "bass"
    if frequency < 2000:
        return "midrange"
    if frequency < 6000:
        return "presence range"
    return "treble"


def describe_point(frequency: float, decibel_level: float, phon: float) -> str:
    """
    Offline one-sentence description of a probe point.
    """
    band = _band_name(frequency)
    if phon <= 0:
        return (
            f"At {frequency:g} Hz ({band}), {decibel_level:.1f} dB SPL sits at or below "
            f"the threshold of hearing and is likely inaudible."
        )

    difference = decibel_level - phon
    if abs(difference) < 1:
        comparison = f"about as loud as the same level at {REFERENCE_FREQUENCY:g} Hz"
    elif difference > 0:
        comparison = (
            f"{difference:.1f} dB quieter than the same level at {REFERENCE_FREQUENCY:g} Hz"
        )
    else:
        comparison = (
            f"{-difference:.1f} dB louder than the same level at {REFERENCE_FREQUENCY:g} Hz"
        )

    return (
        f"At {frequency:g} Hz ({band}), {decibel_level:.1f} dB SPL is heard at about "
        f"{phon:.1f} phon, {comparison}."
    )
