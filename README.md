# reverbkit

Sample-by-sample building blocks for writing reverberators in plain Python.
Everything works on Python floats, one sample at a time. There are no
dependencies beyond the standard library.

## What is inside

- `reverbkit.utils`: `db_to_ratio`, `ratio_to_db` (raises `ValueError` for a
  negative ratio, gives `-inf` for zero), `ms_to_samples`, `next_pow2`,
  `is_prime`, `undenormal` (turns subnormal, infinite and NaN values into
  0.0), and the constants `DEFAULT_SAMPLE_RATE` (48000) and `LN_2_2`.
- `reverbkit.slot`: `Slot`, a multi-channel sample buffer with `alloc`,
  `free`, `channel`, `left`, `right` and a range-clipping `mute`.
- `reverbkit.delay`: `Delay`, a plain delay line (`process`, `process_wf`,
  `last`, `get_z`, `resize` that keeps the samples in flight), and
  `ModulatedDelay`, a delay whose read point is swept with allpass
  interpolation.
- `reverbkit.allpass`: `Allpass` (first order, with `process`,
  `process_decay` and `process_original`) and `Allpass2` (nested second order).
- `reverbkit.modallpass`: `ModulatedAllpass` (swept delay, allpass or linear
  interpolation, optional feedback modulation, `set_90deg_frequency`) and
  `Allpass3` (nested third order with an optionally swept inner delay).
- `reverbkit.biquad`: `Biquad` coefficient designs after the RBJ cookbook
  (`set_lpf_rbj`, `set_hpf_rbj`, `set_bpf_rbj`, `set_bpfp_rbj`,
  `set_bsf_rbj`, `set_apf_rbj`, `set_peak_eq_rbj`, `set_lsf_rbj`,
  `set_hsf_rbj`), `calc_alpha`, `BandwidthMode`, and the constants
  `Q_BUTTERWORTH` and `Q_BESSEL`.
- `reverbkit.efilter`: `FirstOrderIIR` with many first-order designs,
  `EFilter` (a stereo pole/zero pair), `DCCut` (cut-on frequency to gain and
  back) and `AHDSR`, an attack-hold-decay-sustain-release envelope.
- `reverbkit.revbase`: `ReverbBase`, the shared wet/dry levels (as ratios or
  in dB), stereo width, pre-delay and sample-rate handling of a
  reverberator, and `ReverbType`.

## Installing

```
pip install .
```

## Examples

A pre-delay feeding an allpass diffuser:

```python
from reverbkit.allpass import Allpass
from reverbkit.delay import Delay
from reverbkit.utils import db_to_ratio

pre = Delay(441)
diffuser = Allpass(347, feedback=0.5)

gain = db_to_ratio(-6.0)
impulse = [1.0] + [0.0] * 2047
response = [gain * diffuser(pre(x)) for x in impulse]
```

Designing filter coefficients:

```python
from reverbkit.biquad import BandwidthMode, Biquad
from reverbkit.efilter import DCCut

tone = Biquad()
tone.set_lpf_rbj(8000.0, 1.0, 44100.0, BandwidthMode.BW)
b0, b1, b2, a1, a2 = tone.coefficients

dc = DCCut()
dc.set_cut_on_freq(5.0, 48000.0)
print(dc.cut_on_freq(48000.0))  # about 5.0
```

Shaping a signal with an envelope:

```python
from reverbkit.efilter import AHDSR

env = AHDSR()
env.set_rahdsr(1000, 0.1, 0.1, 0.2, 0.5, 0.3)
shaped = [env(1.0) for _ in range(1000)]
```

Reverb settings:

```python
from reverbkit.revbase import ReverbBase

settings = ReverbBase()
settings.wet_db = -6.0
settings.width = 0.5
settings.pre_delay = 10.0        # milliseconds
print(settings.initial_delay)    # 480 samples at 48000 Hz
print(settings.wet1, settings.wet2)
```

`Delay`, `ModulatedDelay`, `Allpass`, `Allpass2`, `ModulatedAllpass`,
`Allpass3` and `AHDSR` are callable; calling them does the same as their
`process` method. A delay or allpass whose buffer has no size yet passes its
input straight through.

## What the package does not do

- `Biquad`, `FirstOrderIIR`, `EFilter` and `DCCut` compute and hold filter
  coefficients and can clear their history, but they have no method that
  runs samples through them.
- `ReverbBase` keeps settings and its pre-delay lines; there is no complete
  reverberator that turns a stereo input into reverberated output.
- There is no command-line tool and no reading or writing of audio files.

## Running the tests

```
pip install .[test]
pytest
```