"""
Tests for the probe controller and its equal-loudness lock.
"""
import pytest

from loudness_engine.contours import decibel_for_phon, phon_for_decibel
from loudness_engine.probe import ProbeSession


def test_initial_state():
    probe = ProbeSession()
    assert probe.frequency == 1000
    assert probe.decibel_level == 60
    assert probe.target_phon == 60
    assert not probe.equal_loudness_mode


def test_unlocked_frequency_change_keeps_level():
    probe = ProbeSession()
    probe.set_frequency(100)
    assert probe.decibel_level == 60
    # 60 dB at 100 Hz lies just above the 40 phon contour (59 dB)
    assert probe.target_phon == pytest.approx(40 + 20 / 19)
    assert probe.target_phon == phon_for_decibel(100, 60)


def test_locked_frequency_change_follows_contour():
    probe = ProbeSession()
    assert probe.toggle_equal_loudness() is True
    assert probe.decibel_level == 60

    probe.set_frequency(100)
    assert probe.decibel_level == 78.0
    probe.set_frequency(20)
    assert probe.decibel_level == 118.0
    assert probe.target_phon == 60


def test_locked_level_is_rounded_to_tenths():
    probe = ProbeSession()
    probe.toggle_equal_loudness()
    probe.set_frequency(150)
    assert probe.decibel_level == round(decibel_for_phon(150, 60) * 10) / 10
    assert probe.decibel_level == pytest.approx(72.7)


def test_enabling_lock_uses_reference_loudness():
    probe = ProbeSession(frequency=100, decibel_level=60)
    probe.toggle_equal_loudness()
    # 60 dB means 60 phon at 1 kHz, which needs 78 dB at 100 Hz
    assert probe.target_phon == 60
    assert probe.decibel_level == 78.0


def test_disabling_lock_restores_level():
    probe = ProbeSession(frequency=100, decibel_level=60)
    probe.toggle_equal_loudness()
    probe.set_frequency(20)
    assert probe.toggle_equal_loudness() is False
    assert probe.decibel_level == 60
    assert probe.target_phon == phon_for_decibel(20, 60)


def test_set_level_shifts_target_contour():
    probe = ProbeSession()
    probe.toggle_equal_loudness()
    probe.set_level(80)
    assert probe.target_phon == 80
    probe.set_frequency(100)
    assert probe.decibel_level == 96.0


def test_select_point():
    probe = ProbeSession()
    probe.select_point(3000, 53)
    assert probe.frequency == 3000
    assert probe.decibel_level == 53
    assert probe.target_phon == pytest.approx(60)
