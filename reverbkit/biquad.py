"""Second-order IIR (biquad) filter coefficients after the RBJ audio EQ cookbook."""

from __future__ import annotations

import math
from enum import IntEnum

from reverbkit.utils import LN_2_2

Q_BUTTERWORTH = 0.7071067811865475244
"""Quality factor of a Butterworth response, 1/sqrt(2)."""

Q_BESSEL = 0.5773502691896257645
"""Quality factor of a Bessel response, 1/sqrt(3)."""


class BandwidthMode(IntEnum):
    """How the bandwidth argument of the RBJ designs is interpreted."""

    BW = 0
    Q = 1
    S = 2


def _limit(value: float, lower: float, upper: float) -> float:
    return lower if value < lower else (upper if value > upper else value)


class Biquad:
    """Coefficients and state of a direct-form biquad filter.

    The filter computes ``b0*x + b1*x[n-1] + b2*x[n-2] - a1*y[n-1] - a2*y[n-2]``.
    """

    def __init__(self) -> None:
        self.b0 = self.b1 = self.b2 = 0.0
        self.a1 = self.a2 = 0.0
        self.mute()

    def mute(self) -> None:
        """Clear the input and output history."""
        self._i1 = self._i2 = 0.0
        self._o1 = self._o2 = 0.0
        self._t0 = self._t1 = self._t2 = 0.0

    def set_coefficients(self, b0: float, b1: float, b2: float, a1: float, a2: float) -> None:
        """Set all five normalised coefficients."""
        self.b0, self.b1, self.b2, self.a1, self.a2 = b0, b1, b2, a1, a2

    @property
    def coefficients(self) -> tuple[float, float, float, float, float]:
        """The coefficients as ``(b0, b1, b2, a1, a2)``."""
        return (self.b0, self.b1, self.b2, self.a1, self.a2)

    @staticmethod
    def calc_alpha(fc: float, bw: float, fs: float, mode: int) -> float:
        """Return the RBJ alpha term for the given bandwidth mode.

        Bandwidth mode takes ``bw`` in octaves; Q mode uses ``sin(w) * 2 * bw``;
        shelf-slope mode and unknown modes give 0.
        """
        omega = 2.0 * math.pi * fc / fs
        sn = math.sin(omega)
        if mode == BandwidthMode.BW:
            return sn * math.sinh(LN_2_2 * bw * omega / sn)
        if mode == BandwidthMode.Q:
            return sn * (2.0 * bw)
        return 0.0

    def _prepare(self, fc: float, bw: float, fs: float, mode: int) -> tuple[float, float, float]:
        omega = 2.0 * math.pi * fc / fs
        cs = math.cos(omega)
        alpha = self.calc_alpha(fc, bw, fs, mode)
        return cs, alpha, 1.0 / (1.0 + alpha)

    def set_apf_rbj(self, fc: float, bw: float, fs: float, mode: int) -> None:
        """Design an allpass whose phase passes -180 degrees at ``fc``."""
        cs, alpha, a0r = self._prepare(fc, bw, fs, mode)
        self.b0 = a0r * (1.0 - alpha)
        self.b1 = a0r * (-2.0 * cs)
        self.b2 = a0r * (1.0 + alpha)
        self.a1 = a0r * (-2.0 * cs)
        self.a2 = a0r * (1.0 - alpha)

    def set_lpf_rbj(self, fc: float, bw: float, fs: float, mode: int) -> None:
        """Design a low-pass filter."""
        cs, alpha, a0r = self._prepare(fc, bw, fs, mode)
        self.b0 = a0r * (1.0 - cs) * 0.5
        self.b1 = a0r * (1.0 - cs)
        self.b2 = a0r * (1.0 - cs) * 0.5
        self.a1 = a0r * (-2.0 * cs)
        self.a2 = a0r * (1.0 - alpha)

    def set_hpf_rbj(self, fc: float, bw: float, fs: float, mode: int) -> None:
        """Design a high-pass filter."""
        cs, alpha, a0r = self._prepare(fc, bw, fs, mode)
        self.b0 = a0r * (1.0 + cs) * 0.5
        self.b1 = a0r * -(1.0 + cs)
        self.b2 = a0r * (1.0 + cs) * 0.5
        self.a1 = -1.0 * a0r * (2.0 * cs)
        self.a2 = -1.0 * a0r * (alpha - 1.0)

    def set_bpf_rbj(self, fc: float, bw: float, fs: float, mode: int) -> None:
        """Design a band-pass filter with a constant 0 dB peak gain."""
        cs, alpha, a0r = self._prepare(fc, bw, fs, mode)
        self.b0 = a0r * alpha
        self.b1 = 0.0
        self.b2 = a0r * (-1.0 * alpha)
        self.a1 = a0r * (-2.0 * cs)
        self.a2 = a0r * (1.0 - alpha)

    def set_bpfp_rbj(self, fc: float, bw: float, fs: float, mode: int) -> None:
        """Design a band-pass filter with a constant skirt gain (peak gain = Q)."""
        cs, alpha, a0r = self._prepare(fc, bw, fs, mode)
        sn = math.sin(2.0 * math.pi * fc / fs)
        self.b0 = a0r * (0.5 * sn)
        self.b1 = 0.0
        self.b2 = a0r * (-0.5 * sn)
        self.a1 = a0r * (-2.0 * cs)
        self.a2 = a0r * (1.0 - alpha)

    def set_bsf_rbj(self, fc: float, bw: float, fs: float, mode: int) -> None:
        """Design a band-stop (notch) filter."""
        cs, alpha, a0r = self._prepare(fc, bw, fs, mode)
        self.b0 = a0r
        self.b1 = a0r * (-2.0 * cs)
        self.b2 = a0r
        self.a1 = a0r * (-2.0 * cs)
        self.a2 = a0r * (1.0 - alpha)

    def set_peak_eq_rbj(self, fc: float, gain: float, bw: float, fs: float) -> None:
        """Design a peaking EQ of ``gain`` dB and ``bw`` octaves.

        ``fc`` is clamped to 1..fs/2 and ``bw`` to 0.0001..4.
        """
        w = 2.0 * math.pi * _limit(fc, 1.0, fs / 2.0) / fs
        cw = math.cos(w)
        sw = math.sin(w)
        j = math.pow(10.0, gain * 0.025)
        g = sw * math.sinh(LN_2_2 * _limit(bw, 0.0001, 4.0) * w / sw)
        a0r = 1.0 / (1.0 + (g / j))
        self.b0 = (1.0 + (g * j)) * a0r
        self.b1 = (-2.0 * cw) * a0r
        self.b2 = (1.0 - (g * j)) * a0r
        self.a1 = self.b1
        self.a2 = -1.0 * ((g / j) - 1.0) * a0r

    def _shelf_terms(
        self, fc: float, gain: float, slope: float, fs: float
    ) -> tuple[float, float, float, float]:
        w = 2.0 * math.pi * _limit(fc, 1.0, fs / 2.0) / fs
        cw = math.cos(w)
        sw = math.sin(w)
        a = math.pow(10.0, gain * 0.025)
        b = math.sqrt(((1.0 + a * a) / _limit(slope, 0.0001, 1.0)) - ((a - 1.0) * (a - 1.0)))
        return a, cw * (a + 1.0), cw * (a - 1.0), b * sw

    def set_lsf_rbj(self, fc: float, gain: float, slope: float, fs: float) -> None:
        """Design a low shelf of ``gain`` dB; ``slope`` is clamped to 0.0001..1."""
        a, apc, amc, bs = self._shelf_terms(fc, gain, slope, fs)
        a0r = 1.0 / (a + 1.0 + amc + bs)
        self.b0 = a0r * a * (a + 1.0 - amc + bs)
        self.b1 = a0r * 2.0 * a * (a - 1.0 - apc)
        self.b2 = a0r * a * (a + 1.0 - amc - bs)
        self.a1 = -1.0 * a0r * 2.0 * (a - 1.0 + apc)
        self.a2 = -1.0 * a0r * (-a - 1.0 - amc + bs)

    def set_hsf_rbj(self, fc: float, gain: float, slope: float, fs: float) -> None:
        """Design a high shelf of ``gain`` dB; ``slope`` is clamped to 0.0001..1."""
        a, apc, amc, bs = self._shelf_terms(fc, gain, slope, fs)
        a0r = 1.0 / (a + 1.0 - amc + bs)
        self.b0 = a0r * a * (a + 1.0 + amc + bs)
        self.b1 = a0r * -2.0 * a * (a - 1.0 + apc)
        self.b2 = a0r * a * (a + 1.0 + amc - bs)
        self.a1 = -1.0 * a0r * -2.0 * (a - 1.0 - apc)
        self.a2 = -1.0 * a0r * (-a - 1.0 + amc + bs)

    def config_text(self) -> str:
        """Describe the filter structure and its coefficients."""
        return (
            "<< BiQuad Filter Coefficients >>\n"
            "(in)--+----*b0-->+----------+->(out) \n"
            "      |          ^          |        \n"
            "      v          |          v        \n"
            "  [z^-1]---*b1-->+<-*(-a1)-[z^-1]    \n"
            "      |          ^          |        \n"
            "      v          |          v        \n"
            "  [z^-1]---*b2-->+<-*(-a2)-[z^-1]    \n\n"
            f"b0 = {self.b0:1.8f}, b1 = {self.b1:1.8f}, b2 = {self.b2:1.8f}\n"
            f"a1 = {self.a1:1.8f}, a2 = {self.a2:1.8f}\n\n"
        )