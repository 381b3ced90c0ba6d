"""State and parameters shared by every stereo reverb."""

from __future__ import annotations

import math
from enum import IntEnum

from reverbkit.delay import Delay
from reverbkit.utils import DEFAULT_SAMPLE_RATE, db_to_ratio, is_prime, ratio_to_db


class ReverbType(IntEnum):
    """Processing variants a reverb may select."""

    SELF = 0
    PROG = 30
    PROG2 = 31
    ZREV = 40
    ZREV2 = 41


def _level_db(ratio: float) -> float:
    return ratio_to_db(ratio) if ratio > 0 else math.nan


class ReverbBase:
    """Wet/dry mixing, stereo width, pre-delay and sample-rate bookkeeping."""

    def __init__(self) -> None:
        self.delay_l = Delay()
        self.delay_r = Delay()
        self.delay_wl = Delay()
        self.delay_wr = Delay()
        self._width = 1.0
        self._wet = 1.0
        self._wet_db = 0.0
        self._dry = 1.0
        self._dry_db = 0.0
        self.wet = 1.0
        self.dry = 1.0
        self.width = 1.0
        self.prime_mode = True
        self.mute_on_change = False
        self._rs_factor = 1.0
        self._sample_rate = float(DEFAULT_SAMPLE_RATE)
        self._initial_delay = 0
        self._pre_delay = 0.0
        self.pre_delay = 0.0
        self.reverb_type: int = ReverbType.SELF

    def mute(self) -> None:
        """Clear the dry and wet delay lines."""
        for line in (self.delay_l, self.delay_r, self.delay_wl, self.delay_wr):
            line.mute()

    @property
    def wet_db(self) -> float:
        """Wet level in decibels; NaN when the wet ratio is not positive."""
        return self._wet_db

    @wet_db.setter
    def wet_db(self, value: float) -> None:
        self._wet_db = value
        self._wet = db_to_ratio(value)
        self._update_wet()

    @property
    def wet(self) -> float:
        """Wet level as a linear ratio."""
        return self._wet

    @wet.setter
    def wet(self, value: float) -> None:
        self._wet = value
        self._wet_db = _level_db(value)
        self._update_wet()

    @property
    def dry_db(self) -> float:
        """Dry level in decibels; NaN when the dry ratio is not positive."""
        return self._dry_db

    @dry_db.setter
    def dry_db(self, value: float) -> None:
        self._dry_db = value
        self._dry = db_to_ratio(value)

    @property
    def dry(self) -> float:
        """Dry level as a linear ratio."""
        return self._dry

    @dry.setter
    def dry(self, value: float) -> None:
        self._dry = value
        self._dry_db = _level_db(value)

    @property
    def width(self) -> float:
        """Stereo width: 1 keeps channels apart, 0 blends them equally."""
        return self._width

    @width.setter
    def width(self, value: float) -> None:
        self._width = value
        self._update_wet()

    @property
    def wet1(self) -> float:
        """Gain of the wet signal into its own channel."""
        return self._wet1

    @property
    def wet2(self) -> float:
        """Gain of the wet signal into the opposite channel."""
        return self._wet2

    def _update_wet(self) -> None:
        self._wet1 = self._wet * (self._width / 2 + 0.5)
        self._wet2 = self._wet * ((1 - self._width) / 2)

    @property
    def initial_delay(self) -> int:
        """Delay of the wet signal in samples; negative values delay the dry signal instead."""
        return self._initial_delay

    @initial_delay.setter
    def initial_delay(self, samples: int) -> None:
        self._initial_delay = samples
        self._pre_delay = samples * 1000.0 / self._sample_rate
        if samples >= 0:
            dry_size, wet_size = 0, samples
        else:
            dry_size, wet_size = -samples, 0
        for line, size in (
            (self.delay_l, dry_size),
            (self.delay_r, dry_size),
            (self.delay_wl, wet_size),
            (self.delay_wr, wet_size),
        ):
            if size > 0:
                line.resize(size)
            else:
                line.free()

    @property
    def pre_delay(self) -> float:
        """Initial delay in milliseconds, rounded to whole samples."""
        return self._pre_delay

    @pre_delay.setter
    def pre_delay(self, value_ms: float) -> None:
        self._pre_delay = value_ms
        self.initial_delay = int(self._sample_rate * value_ms / 1000.0)

    @property
    def latency(self) -> int:
        """Processing latency in samples."""
        return 0

    @property
    def sample_rate(self) -> float:
        """Sample rate in Hz; non-positive assignments are ignored."""
        return self._sample_rate

    @sample_rate.setter
    def sample_rate(self, fs: float) -> None:
        if fs <= 0:
            return
        self._sample_rate = fs
        self._update_fs_factors()
        if self.mute_on_change:
            self.mute()

    @property
    def rs_factor(self) -> float:
        """Room-size scaling factor; non-positive assignments are ignored."""
        return self._rs_factor

    @rs_factor.setter
    def rs_factor(self, value: float) -> None:
        if value <= 0:
            return
        self._rs_factor = value
        self._update_fs_factors()
        if self.mute_on_change:
            self.mute()

    def _update_fs_factors(self) -> None:
        """Recompute everything that depends on the sample rate or room size."""
        self.pre_delay = self._pre_delay

    def scaled_size(self, default: float, factor: float) -> int:
        """Scale a nominal length, truncating and never going below 1."""
        return max(int(default * factor), 1)

    def prime_size(self, default: float, factor: float) -> int:
        """Scale a nominal length and, in prime mode, round it up to a prime."""
        base = self.scaled_size(default, factor)
        if self.prime_mode:
            while not is_prime(base):
                base += 1
        return base

    def config_text(self) -> str:
        """Describe the current configuration."""
        return (
            "*** revbase config ***\n"
            f"Fs = {self._sample_rate:f}[Hz]\n"
            f"Wet {self._wet:f} Dry {self._dry:f} Width {self._width:f}\n"
        )