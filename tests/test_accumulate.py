'''test_accumulate.py - Oct 2026
License: MIT - see the LICENSE file for details.

This tests the following:

- the angle-addition rotation of the sin/cos state
- the per-bin moment sums against direct evaluation
- accumulating separate bin ranges and merging them back together

'''

import numpy as np
from numpy.testing import assert_allclose
import pytest

from glsbase.errors import InvalidInput
from glsbase.periodbase.accumulate import (
    RESYNC_INTERVAL, BinMoments, exact_state, rotate_state,
    accumulate_moments, concatenate_moments
)
from glsbase.periodbase.utils import center_signal


############
## CONFIG ##
############

OMEGA_START = 2.0*np.pi*0.02
OMEGA_STEP = 2.0*np.pi*0.004
NUM_FREQ = 250


def make_inputs(ndet=45, seed=11):
    '''
    This makes a random time-series with normalized weights.

    '''

    rng = np.random.default_rng(seed)
    times = np.sort(rng.uniform(0.0, 25.0, ndet))
    signal = rng.normal(5.0, 1.0, ndet)
    weights = rng.uniform(0.5, 2.0, ndet)
    weights = weights/weights.sum()
    y, mean = center_signal(signal, weights)

    return times, y, weights


def direct_moments(times, y, weights, omega):
    '''
    This evaluates the six per-bin sums with direct sin() and cos() calls.

    '''

    sinx = np.sin(omega*times)
    cosx = np.cos(omega*times)

    return BinMoments(np.sum(weights*y*sinx),
                      np.sum(weights*y*cosx),
                      np.sum(weights*sinx),
                      np.sum(weights*cosx),
                      np.sum(weights*sinx*sinx),
                      np.sum(weights*sinx*cosx))


###########
## TESTS ##
###########

def test_default_resync_interval():
    '''
    Tests the default resync cadence.

    '''

    assert RESYNC_INTERVAL == 5000


def test_rotate_state():
    '''
    Tests that one rotation matches the exact values at the next frequency.

    '''

    times, y, weights = make_inputs()

    sinx, cosx = exact_state(times, OMEGA_START)
    sindx, cosdx = exact_state(times, OMEGA_STEP)
    next_sinx, next_cosx = rotate_state(sinx, cosx, sindx, cosdx)

    exact_sinx, exact_cosx = exact_state(times, OMEGA_START + OMEGA_STEP)

    assert_allclose(next_sinx, exact_sinx, atol=1.0e-12)
    assert_allclose(next_cosx, exact_cosx, atol=1.0e-12)


@pytest.mark.parametrize('resync_interval', [1, 7, RESYNC_INTERVAL])
def test_moments_match_direct(resync_interval):
    '''
    Tests every bin's sums against direct trigonometric evaluation.

    '''

    times, y, weights = make_inputs()

    moments = accumulate_moments(times, y, weights,
                                 OMEGA_START, OMEGA_STEP, NUM_FREQ,
                                 resync_interval=resync_interval)

    assert moments.binstart == 0
    assert moments.binend == NUM_FREQ
    assert moments.nbins == NUM_FREQ
    assert_allclose(moments.sum_y, np.sum(weights*y), atol=1.0e-14)
    assert_allclose(moments.sum_yy, np.sum(weights*y*y))

    for j in range(NUM_FREQ):

        expected = direct_moments(times, y, weights,
                                  OMEGA_START + j*OMEGA_STEP)
        got = moments.bin(j)

        for field in BinMoments._fields:
            assert_allclose(getattr(got, field),
                            getattr(expected, field),
                            atol=1.0e-12)


def test_bin_record():
    '''
    Tests the per-bin record lookup with a global bin index.

    '''

    times, y, weights = make_inputs()

    moments = accumulate_moments(times, y, weights,
                                 OMEGA_START, OMEGA_STEP, NUM_FREQ,
                                 binstart=100, binend=120)

    record = moments.bin(105)
    assert isinstance(record, BinMoments)
    assert record.sum_sinsin == moments.sum_sinsin[5]
    assert record.sum_ycos == moments.sum_ycos[5]

    with pytest.raises(IndexError):
        moments.bin(99)

    with pytest.raises(IndexError):
        moments.bin(120)


def test_split_ranges_exact_trig():
    '''
    Tests that split accumulation with exact trigonometry matches the
    full-range accumulation to rounding.

    '''

    times, y, weights = make_inputs()

    full = accumulate_moments(times, y, weights,
                              OMEGA_START, OMEGA_STEP, NUM_FREQ,
                              resync_interval=1)

    parts = [
        accumulate_moments(times, y, weights,
                           OMEGA_START, OMEGA_STEP, NUM_FREQ,
                           binstart=binstart, binend=binend,
                           resync_interval=1)
        for binstart, binend in ((170, NUM_FREQ), (0, 60), (60, 170))
    ]
    merged = concatenate_moments(parts)

    assert merged.binstart == 0
    assert merged.nbins == NUM_FREQ
    for fullval, mergedval in zip(full, merged):
        assert_allclose(mergedval, fullval, rtol=1.0e-14, atol=1.0e-16)


def test_split_ranges_rotated():
    '''
    Tests that split accumulation with the default cadence agrees with the
    full-range accumulation.

    '''

    times, y, weights = make_inputs()

    full = accumulate_moments(times, y, weights,
                              OMEGA_START, OMEGA_STEP, NUM_FREQ)

    merged = concatenate_moments([
        accumulate_moments(times, y, weights,
                           OMEGA_START, OMEGA_STEP, NUM_FREQ,
                           binstart=0, binend=125),
        accumulate_moments(times, y, weights,
                           OMEGA_START, OMEGA_STEP, NUM_FREQ,
                           binstart=125),
    ])

    for field in BinMoments._fields:
        assert_allclose(getattr(merged, field),
                        getattr(full, field),
                        atol=1.0e-12)


def test_concatenate_gaps():
    '''
    Tests that non-contiguous bin ranges can't be merged.

    '''

    times, y, weights = make_inputs()

    first = accumulate_moments(times, y, weights,
                               OMEGA_START, OMEGA_STEP, NUM_FREQ,
                               binstart=0, binend=50)
    third = accumulate_moments(times, y, weights,
                               OMEGA_START, OMEGA_STEP, NUM_FREQ,
                               binstart=100, binend=150)

    with pytest.raises(InvalidInput):
        concatenate_moments([first, third])

    with pytest.raises(InvalidInput):
        concatenate_moments([])


def test_concatenate_different_series():
    '''
    Tests that moment sums from different time-series can't be merged.

    '''

    times, y, weights = make_inputs()
    othertimes, othery, otherweights = make_inputs(seed=12)

    first = accumulate_moments(times, y, weights,
                               OMEGA_START, OMEGA_STEP, NUM_FREQ,
                               binstart=0, binend=50)
    second = accumulate_moments(othertimes, othery, otherweights,
                                OMEGA_START, OMEGA_STEP, NUM_FREQ,
                                binstart=50, binend=100)

    with pytest.raises(InvalidInput):
        concatenate_moments([first, second])


@pytest.mark.parametrize('binstart,binend', [(-1, 10),
                                             (10, 10),
                                             (20, 10),
                                             (0, NUM_FREQ + 1)])
def test_invalid_bin_range(binstart, binend):
    '''
    Tests that empty or out-of-grid bin ranges raise InvalidInput.

    '''

    times, y, weights = make_inputs()

    with pytest.raises(InvalidInput):
        accumulate_moments(times, y, weights,
                           OMEGA_START, OMEGA_STEP, NUM_FREQ,
                           binstart=binstart, binend=binend)


@pytest.mark.parametrize('resync_interval', [0, -5, 2.5, True])
def test_invalid_resync_interval(resync_interval):
    '''
    Tests that bad resync intervals raise InvalidInput.

    '''

    times, y, weights = make_inputs()

    with pytest.raises(InvalidInput):
        accumulate_moments(times, y, weights,
                           OMEGA_START, OMEGA_STEP, NUM_FREQ,
                           resync_interval=resync_interval)
