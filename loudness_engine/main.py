import sys
from typing import List, Optional

from loudness_engine.contours import (
    DEFAULT_TABLE,
    ContourTable,
    decibel_for_phon,
    load_contour_table,
    phon_for_decibel,
)
from loudness_engine.dsp import measure_integrated_lufs, measure_peak_dbfs, render_tone
from loudness_engine.exceptions import LoudnessEngineError
from loudness_engine.insight import describe_point
from loudness_engine.utils.logger import get_logger, level_from_env, setup_logging

logger = get_logger(__name__)

USAGE = """\
Usage:
  loudness-engine phon <frequency_hz> <decibel_spl>
  loudness-engine db <frequency_hz> <phon>
  loudness-engine table [contours.json]
  loudness-engine tone <frequency_hz> <decibel_spl> <output.wav> [duration_sec]
Example: loudness-engine phon 100 60"""

DEFAULT_TONE_DURATION_SEC = 2.0


def _print_table(table: ContourTable) -> None:
    header = ["Hz"] + [f"{phon} phon" for phon in table.phon_indices]
    print("  ".join(f"{cell:>9}" for cell in header))
    for point in table:
        row = [f"{point.frequency:g}"] + [f"{point.levels[phon]:g}" for phon in table.phon_indices]
        print("  ".join(f"{cell:>9}" for cell in row))


def _command_phon(args: List[str]) -> int:
    if len(args) != 2:
        print(USAGE)
        return 1
    frequency, decibel_level = float(args[0]), float(args[1])
    phon = phon_for_decibel(frequency, decibel_level)
    print(f"{phon:.2f} phon")
    print(describe_point(frequency, decibel_level, phon))
    return 0


def _command_db(args: List[str]) -> int:
    if len(args) != 2:
        print(USAGE)
        return 1
    frequency, phon = float(args[0]), float(args[1])
    print(f"{decibel_for_phon(frequency, phon):.2f} dB SPL")
    return 0


def _command_table(args: List[str]) -> int:
    if len(args) > 1:
        print(USAGE)
        return 1
    table = load_contour_table(args[0]) if args else DEFAULT_TABLE
    _print_table(table)
    return 0


def _command_tone(args: List[str]) -> int:
    if len(args) not in (3, 4):
        print(USAGE)
        return 1
    frequency, decibel_level = float(args[0]), float(args[1])
    output_path = args[2]
    duration_sec = float(args[3]) if len(args) == 4 else DEFAULT_TONE_DURATION_SEC

    logger.info(f"Rendering {frequency:g} Hz at {decibel_level:g} dB SPL -> {output_path}")
    audio = render_tone(frequency, decibel_level, duration_sec * 1000)
    audio.export(output_path, format="wav")

    peak = measure_peak_dbfs(audio)
    try:
        lufs = measure_integrated_lufs(audio)
        logger.info(f"Tone written: peak {peak:.2f} dBFS, {lufs:.2f} LUFS integrated")
    except ValueError as e:
        logger.info(f"Tone written: peak {peak:.2f} dBFS ({e})")
    return 0


COMMANDS = {
    "phon": _command_phon,
    "db": _command_db,
    "table": _command_table,
    "tone": _command_tone,
}


def main(argv: Optional[List[str]] = None) -> int:
    setup_logging(level=level_from_env())
    argv = list(sys.argv[1:] if argv is None else argv)

    if not argv or argv[0] not in COMMANDS:
        print(USAGE)
        return 1

    try:
        return COMMANDS[argv[0]](argv[1:])
    except LoudnessEngineError as e:
        logger.error(str(e))
        return 1
    except ValueError as e:
        # float() parsing of command-line numbers
        logger.error(f"Invalid argument: {e}")
        return 1
    except OSError as e:
        logger.error(f"File error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
