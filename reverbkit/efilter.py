"""First-order filters, a pole/zero filter pair, a DC blocker and an AHDSR envelope."""

from __future__ import annotations

import math


class FirstOrderIIR:
    """Coefficients and state of a first-order IIR filter.

    The filter computes ``b1*x + b2*x[n-1] + a2*y[n-1]``.
    """

    def __init__(self) -> None:
        self.b1 = 0.0
        self.b2 = 0.0
        self.a2 = 0.0
        self.mute()

    def mute(self) -> None:
        """Clear the filter history."""
        self._y1 = 0.0

    def set_coefficients(self, b1: float, b2: float, a2: float) -> None:
        """Set the three coefficients."""
        self.b1, self.b2, self.a2 = b1, b2, a2

    @property
    def coefficients(self) -> tuple[float, float, float]:
        """The coefficients as ``(b1, b2, a2)``."""
        return (self.b1, self.b2, self.a2)

    def set_lpf_bw(self, fc: float, fs: float) -> None:
        """Design a first-order Butterworth low-pass filter."""
        t = math.tan(math.pi * fc / fs)
        self.b1 = self.b2 = t / (1.0 + t)
        self.a2 = (1.0 - t) / (1.0 + t)

    def set_hpf_bw(self, fc: float, fs: float) -> None:
        """Design a first-order Butterworth high-pass filter."""
        t = math.tan(math.pi * fc / fs)
        self.b1 = 1.0 / (1.0 + t)
        self.b2 = -1.0 * self.b1
        self.a2 = (1.0 - t) / (1.0 + t)

    @staticmethod
    def _pole(fc: float, fs: float) -> float:
        return math.exp(-1.0 * math.pi * fc / (fs / 2.0))

    def set_lpf_a(self, fc: float, fs: float) -> None:
        """Design a low-pass filter normalised to unity DC gain."""
        self.a2 = self._pole(fc, fs)
        norm = (1.0 - self.a2) / (1.0 + 0.12)
        self.b1 = norm
        self.b2 = 0.12 * norm

    def set_hpf_a(self, fc: float, fs: float) -> None:
        """Design a high-pass filter normalised to unity Nyquist gain."""
        self.a2 = self._pole(fc, fs)
        norm = (1.0 + self.a2) / 2.0
        self.b1 = norm
        self.b2 = -1.0 * norm

    def set_lsf_a(self, f1: float, f2: float, fs: float) -> None:
        """Design a low shelf between ``f1`` and ``f2``."""
        self.a2 = -1.0 * self._pole(f1, fs)
        self.b1 = -1.0
        self.b2 = self._pole(f2, fs)

    def set_hsf_a(self, f1: float, f2: float, fs: float) -> None:
        """Design a high shelf between ``f1`` and ``f2``, normalised to unity DC gain."""
        self.a2 = self._pole(f1, fs)
        b1 = -1.0
        b2 = self._pole(f2, fs)
        norm = (1.0 - self.a2) / (b1 + b2)
        self.b1 = b1 * norm
        self.b2 = b2 * norm

    def set_hpf_w_lfs_a(self, fc: float, fs: float) -> None:
        """Design a high-pass filter with a low-frequency shelf."""
        b1 = -1.0
        b2 = self._pole(fc, fs)
        self.a2 = -0.12
        norm = (1.0 - self.a2) / abs(b1 + b2)
        self.b1 = b1 * norm
        self.b2 = b2 * norm

    def set_lpf_c(self, fc: float, fs: float) -> None:
        """Design a simple bilinear-style low-pass filter."""
        self.b1 = self.b2 = fc / (fs + fc)
        self.a2 = (fs - fc) / (fs + fc)

    def set_hpf_c(self, fc: float, fs: float) -> None:
        """Design a simple bilinear-style high-pass filter."""
        self.b1 = fs / (fs + fc)
        self.b2 = -1.0 * self.b1
        self.a2 = (fs - fc) / (fs + fc)

    def set_pole(self, v: float) -> None:
        """Place a single pole at ``v`` with unity peak gain."""
        self.a2 = v
        norm = 1.0 - abs(v)
        self.b1 = norm
        self.b2 = 0.0

    def set_zero(self, v: float) -> None:
        """Place a single zero at ``v``."""
        self.a2 = 0.0
        norm = 1.0 + abs(v)
        self.b1 = -1.0 * norm
        self.b2 = v * norm

    def set_pole_lpf(self, fc: float, fs: float) -> None:
        """Design a one-pole low-pass filter with -3 dB at ``fc``."""
        c = 2.0 - math.cos(2.0 * math.pi * fc / fs)
        coeff = c - math.sqrt(c * c - 1.0)
        self.a2 = coeff
        self.b1 = 1.0 - coeff
        self.b2 = 0.0

    def set_pole_hpf(self, fc: float, fs: float) -> None:
        """Design a one-pole high-pass filter with -3 dB at ``fc``."""
        c = 2.0 + math.cos(2.0 * math.pi * fc / fs)
        coeff = c - math.sqrt(c * c - 1.0)
        self.a2 = -1.0 * coeff
        self.b1 = coeff - 1.0
        self.b2 = 0.0

    def set_zero_lpf(self, fc: float, fs: float) -> None:
        """Design a one-zero low-pass filter; meant for ``fc`` above fs/4."""
        c = 1.0 - 2.0 * math.cos(2.0 * math.pi * fc / fs)
        coeff = c - math.sqrt(c * c - 1.0)
        self.a2 = 0.0
        self.b1 = 1.0 / (1.0 + coeff)
        self.b2 = coeff / (1.0 + coeff)

    def set_zero_hpf(self, fc: float, fs: float) -> None:
        """Design a one-zero high-pass filter; meant for ``fc`` below fs/4."""
        c = 1.0 + 2.0 * math.cos(2.0 * math.pi * fc / fs)
        coeff = c - math.sqrt(c * c - 1.0)
        self.a2 = 0.0
        self.b1 = 1.0 / (1.0 + coeff)
        self.b2 = -1.0 * coeff / (1.0 + coeff)

    def config_text(self) -> str:
        """Describe the filter structure and its coefficients."""
        return (
            "<< 1st order IIR Filter Coefficients >>\n"
            "(in)--+----*b1-->+----------+->(out) \n"
            "      |          ^          |        \n"
            "      v          |          v        \n"
            "  [z^-1]---*b2-->+<--*a2---[z^-1]    \n"
            f"b1 = {self.b1:f}, b2 = {self.b2:f}\n"
            f"a1 = 1, a2 = {self.a2:f}\n"
        )


class EFilter:
    """A stereo pair of one-pole low-pass and one-zero high-pass filters."""

    def __init__(self) -> None:
        self.lpf_l = FirstOrderIIR()
        self.lpf_r = FirstOrderIIR()
        self.hpf_l = FirstOrderIIR()
        self.hpf_r = FirstOrderIIR()
        self._pole = 0.0
        self._zero = 0.0
        self.lpf = 0.0
        self.hpf = 0.0
        self.mute()

    def mute(self) -> None:
        """Clear the history of all four filters."""
        for f in (self.lpf_l, self.lpf_r, self.hpf_l, self.hpf_r):
            f.mute()

    @property
    def lpf(self) -> float:
        """Pole position of the low-pass filters."""
        return self._pole

    @lpf.setter
    def lpf(self, value: float) -> None:
        self._pole = value
        self.lpf_l.set_pole(value)
        self.lpf_r.set_pole(value)

    @property
    def hpf(self) -> float:
        """Zero position of the high-pass filters."""
        return self._zero

    @hpf.setter
    def hpf(self, value: float) -> None:
        self._zero = value
        self.hpf_l.set_zero(value)
        self.hpf_r.set_zero(value)


class DCCut:
    """A DC-blocking filter controlled by a single gain coefficient."""

    def __init__(self, gain: float = 0.9999) -> None:
        self.gain = gain
        self.mute()

    def mute(self) -> None:
        """Clear the filter history."""
        self._y1 = 0.0
        self._y2 = 0.0

    def set_cut_on_freq(self, fc: float, fs: float) -> None:
        """Set the gain so the filter cuts on at ``fc`` Hz."""
        x = math.pi * (2.0 * fc / fs)
        root3 = math.sqrt(3.0)
        self.gain = (root3 - 2.0 * math.sin(x)) / (math.sin(x) + root3 * math.cos(x))

    def cut_on_freq(self, fs: float | None = None) -> float:
        """Return the cut-on frequency: in Hz for ``fs``, else relative to Nyquist."""
        g = self.gain
        normalized = math.atan(math.sqrt(3.0) * (1.0 - g * g) / (1.0 + 4.0 * g + g * g)) / math.pi
        if fs is None:
            return normalized
        return normalized * fs / 2.0


class AHDSR:
    """An attack-hold-decay-sustain-release envelope applied sample by sample."""

    def __init__(self, loop_mode: bool = False) -> None:
        self.loop_mode = loop_mode
        self.total = 0
        self.attack = 0
        self.hold = 0
        self.decay = 0
        self.sustain = 0
        self.release = 0
        self.sustain_level = 0.0
        self.reset()

    def reset(self) -> None:
        """Restart the envelope from its beginning."""
        self._count = -1

    def set_rahdsr(
        self,
        samples: int,
        attack: float,
        hold: float,
        decay: float,
        sustain: float,
        release: float,
    ) -> None:
        """Split ``samples`` into the envelope stages.

        The release takes its fraction of the whole; attack, decay and hold
        each take their fraction of what remains before them, in that order;
        the rest is sustained at level ``sustain``.
        """
        self.total = samples
        self.release = int(samples * release)
        rest = samples - self.release
        self.attack = int(rest * attack)
        rest -= self.attack
        self.decay = int(rest * decay)
        rest -= self.decay
        self.hold = int(rest * hold)
        rest -= self.hold
        self.sustain = rest
        self.sustain_level = sustain

    def process(self, value: float) -> float:
        """Return ``value`` scaled by the envelope at the next sample."""
        self._count += 1
        count = self._count
        a = self.attack
        ah = a + self.hold
        ahd = ah + self.decay
        ahds = ahd + self.sustain
        end = ahds + self.release
        level = self.sustain_level
        if count < a:
            return value * count / a
        if a <= count < ah:
            return value
        if ah <= count < ahd:
            return value * (level + (1.0 - level) * (1.0 - (count - ah) / self.decay))
        if ahd <= count < ahds:
            return value * level
        if ahds <= count < end:
            return value * level * (1.0 - (count - ahds) / self.release)
        if count >= end:
            if self.loop_mode:
                self._count = -1
            else:
                self._count -= 1
            return 0.0
        return 1.0

    def __call__(self, value: float) -> float:
        return self.process(value)