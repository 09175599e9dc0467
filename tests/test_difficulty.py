"""Tests for difficulty tier selection."""
from __future__ import annotations

import pytest

from quiz_api.difficulty import Difficulty, select_level


class TestSelectLevel:
    @pytest.mark.parametrize("requested", list(Difficulty))
    def test_passthrough_without_signal(self, requested):
        assert select_level(requested) is requested

    def test_default_is_easy(self):
        assert select_level() is Difficulty.EASY

    def test_accepts_plain_strings(self):
        assert select_level("hard") is Difficulty.HARD

    @pytest.mark.parametrize("accuracy", [0.851, 0.9, 1.0])
    def test_high_accuracy_is_hard(self, accuracy):
        assert select_level(Difficulty.EASY, accuracy) is Difficulty.HARD

    @pytest.mark.parametrize("accuracy", [0.0, 0.25, 0.4999])
    def test_low_accuracy_is_easy(self, accuracy):
        assert select_level(Difficulty.HARD, accuracy) is Difficulty.EASY

    @pytest.mark.parametrize("accuracy", [0.5, 0.6, 0.85])
    def test_middle_band_is_medium(self, accuracy):
        assert select_level(Difficulty.HARD, accuracy) is Difficulty.MEDIUM

    def test_signal_overrides_request(self):
        assert select_level(Difficulty.HARD, 0.1) is Difficulty.EASY
        assert select_level(Difficulty.EASY, 0.95) is Difficulty.HARD
