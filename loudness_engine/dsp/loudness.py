import numpy as np
import pyloudnorm as pyln

from pydub import AudioSegment


# pyloudnorm gating needs at least one 400 ms block
MIN_LUFS_DURATION_MS = 400


def audiosegment_to_float(audio: AudioSegment) -> np.ndarray:
    """
    Convert AudioSegment to float32 numpy array (-1.0 to 1.0)
    """
    if audio is None:
        raise ValueError("Cannot convert to float: audio is None")

    if not hasattr(audio, 'sample_width') or audio.sample_width is None:
        raise ValueError(f"Cannot convert to float: audio has invalid sample_width (audio type: {type(audio)})")

    samples = np.array(audio.get_array_of_samples())

    if audio.channels > 1:
        samples = samples.reshape((-1, audio.channels))

    return samples.astype(np.float32) / (2 ** (8 * audio.sample_width - 1))


def measure_integrated_lufs(audio: AudioSegment) -> float:
    """
    Measure integrated LUFS of a rendered AudioSegment.
    """
    if audio is None:
        raise ValueError("Cannot measure LUFS: audio is None")

    if len(audio) < MIN_LUFS_DURATION_MS:
        raise ValueError(
            f"Cannot measure LUFS: audio is {len(audio)} ms, need at least {MIN_LUFS_DURATION_MS} ms"
        )

    meter = pyln.Meter(audio.frame_rate)
    samples = audiosegment_to_float(audio)

    return meter.integrated_loudness(samples)


def measure_peak_dbfs(audio: AudioSegment) -> float:
    """
    Sample peak in dBFS; -inf for silence.
    """
    if audio is None:
        raise ValueError("Cannot measure peak: audio is None")
    return audio.max_dBFS
