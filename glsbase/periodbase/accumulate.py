#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# accumulate.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''
Accumulates the weighted trigonometric moment sums needed by the generalized
Lomb-Scargle solve on an equidistant frequency grid.

For a sample at time t, the angle at bin j is t*(omega_start + j*omega_step),
so going from bin j to bin j+1 is a rotation by t*omega_step. Instead of
calling sin() and cos() for every (sample, bin) pair, the values for the next
bin are obtained with the angle-addition formulas::

    cos(x + dx) = cos(x)*cos(dx) - sin(x)*sin(dx)
    sin(x + dx) = sin(x)*cos(dx) + cos(x)*sin(dx)

Each rotation adds a rounding error of a few ulps to the state, and these
errors grow roughly linearly with the number of rotations applied since the
last exact evaluation. To bound this drift, the state is recomputed exactly
from sin() and cos() after every bin j with ``j % resync_interval == 0``. With
the default `RESYNC_INTERVAL` of 5000, the state never goes through more than
5000 consecutive rotations, i.e. its error stays around 5000 * 1e-16 ~ 1e-12
relative to the exact values. This default is a practical trade-off and not
derived from a formal error analysis. Use ``resync_interval=1`` to evaluate
sin() and cos() exactly at every bin.

The rotation state is kept as a pair of arrays over all samples, and each bin
gets its own slot in the output arrays. No bin depends on the sums of another
bin, so any contiguous range of bins can be accumulated on its own and the
ranges merged later with :py:func:`.concatenate_moments`.

'''

#############
## LOGGING ##
#############

import logging
from glsbase import log_sub, log_fmt, log_date_fmt

DEBUG = False
if DEBUG:
    level = logging.DEBUG
else:
    level = logging.INFO
LOGGER = logging.getLogger(__name__)
logging.basicConfig(
    level=level,
    style=log_sub,
    format=log_fmt,
    datefmt=log_date_fmt,
)

LOGDEBUG = LOGGER.debug
LOGINFO = LOGGER.info
LOGWARNING = LOGGER.warning
LOGERROR = LOGGER.error
LOGEXCEPTION = LOGGER.exception


#############
## IMPORTS ##
#############

from collections import namedtuple
from numbers import Integral

from numpy import (
    sin as npsin, cos as npcos, dot as npdot, sum as npsum,
    empty as npempty, concatenate as npconcatenate,
)

from tqdm import tqdm


###################
## LOCAL IMPORTS ##
###################

from ..errors import InvalidInput


############
## CONFIG ##
############

# the rotation state is recomputed exactly after every bin j where
# j % RESYNC_INTERVAL == 0
RESYNC_INTERVAL = 5000


#################
## MOMENT SUMS ##
#################

BinMoments = namedtuple(
    'BinMoments',
    ['sum_ysin', 'sum_ycos', 'sum_sin', 'sum_cos', 'sum_sinsin', 'sum_sincos']
)


class MomentSums(namedtuple('MomentSums',
                            ['binstart',
                             'sum_y',
                             'sum_yy',
                             'sum_ysin',
                             'sum_ycos',
                             'sum_sin',
                             'sum_cos',
                             'sum_sinsin',
                             'sum_sincos'])):
    '''The weighted moment sums for a contiguous range of frequency bins.

    `sum_y` and `sum_yy` are global scalars::

        sum_y = sum( w_i*y_i )
        sum_yy = sum( w_i*y_i*y_i )

    and the remaining six fields are arrays with one element per bin, starting
    at the global bin index `binstart`::

        sum_ysin[k] = sum( w_i*y_i*sin(w_j t_i) )
        sum_ycos[k] = sum( w_i*y_i*cos(w_j t_i) )
        sum_sin[k] = sum( w_i*sin(w_j t_i) )
        sum_cos[k] = sum( w_i*cos(w_j t_i) )
        sum_sinsin[k] = sum( w_i*sin(w_j t_i)*sin(w_j t_i) )
        sum_sincos[k] = sum( w_i*sin(w_j t_i)*cos(w_j t_i) )

    where j = binstart + k.

    '''

    __slots__ = ()

    @property
    def nbins(self):
        return self.sum_ysin.size

    @property
    def binend(self):
        return self.binstart + self.nbins

    def bin(self, j):
        '''
        Returns the BinMoments record for the global bin index `j`.

        '''

        k = j - self.binstart
        if k < 0 or k >= self.nbins:
            raise IndexError('bin %s is outside this range [%s, %s)' %
                             (j, self.binstart, self.binend))

        return BinMoments(self.sum_ysin[k],
                          self.sum_ycos[k],
                          self.sum_sin[k],
                          self.sum_cos[k],
                          self.sum_sinsin[k],
                          self.sum_sincos[k])


####################
## ROTATION STATE ##
####################

def exact_state(times, omega):
    '''
    Returns (sin(omega*t), cos(omega*t)) evaluated directly.

    '''
    angle = times*omega
    return npsin(angle), npcos(angle)


def rotate_state(sinx, cosx, sindx, cosdx):
    '''This advances the rotation state by one frequency step.

    Parameters
    ----------

    sinx,cosx : np.array
        sin(w t) and cos(w t) for the current bin.

    sindx,cosdx : np.array
        sin(dw t) and cos(dw t), where dw is the angular frequency step.

    Returns
    -------

    (sinx, cosx) : tuple of np.arrays
        sin((w + dw) t) and cos((w + dw) t).

    '''

    return (sinx*cosdx + cosx*sindx,
            cosx*cosdx - sinx*sindx)


##################
## ACCUMULATION ##
##################

def _check_resync_interval(resync_interval):

    if (isinstance(resync_interval, bool) or
        not isinstance(resync_interval, Integral) or
        resync_interval < 1):
        raise InvalidInput('resync_interval must be an integer >= 1, got %r' %
                           resync_interval)


def accumulate_moments(times,
                       y,
                       weights,
                       omega_start,
                       omega_step,
                       num_freq,
                       binstart=0,
                       binend=None,
                       resync_interval=RESYNC_INTERVAL,
                       verbose=False):
    '''This accumulates the moment sums for a range of frequency bins.

    Parameters
    ----------

    times,y,weights : np.array
        The times, the mean-subtracted signal, and the normalized weights.

    omega_start,omega_step : float
        The angular frequency of bin 0 and the angular frequency step.

    num_freq : int
        The total number of bins in the frequency grid.

    binstart,binend : int or None
        Only bins `binstart` through `binend - 1` are accumulated. If `binend`
        is None, goes up to the end of the grid.

    resync_interval : int
        The rotation state is recomputed exactly after every bin j with
        ``j % resync_interval == 0``. The cadence is keyed on the global bin
        index j, not on the position within this range.

    verbose : bool
        If True, shows a progress bar over the frequency bins.

    Returns
    -------

    MomentSums
        The global sums and the per-bin sums for this range of bins.

    '''

    _check_resync_interval(resync_interval)

    if binend is None:
        binend = num_freq

    if not (0 <= binstart < binend <= num_freq):
        raise InvalidInput('invalid bin range [%s, %s) for %s bins' %
                           (binstart, binend, num_freq))

    nbins = binend - binstart

    wy = weights*y
    sum_y = npsum(wy)
    sum_yy = npdot(wy, y)

    sum_ysin = npempty(nbins)
    sum_ycos = npempty(nbins)
    sum_sin = npempty(nbins)
    sum_cos = npempty(nbins)
    sum_sinsin = npempty(nbins)
    sum_sincos = npempty(nbins)

    sindx, cosdx = exact_state(times, omega_step)
    sinx, cosx = exact_state(times, omega_start + binstart*omega_step)

    if verbose:
        binrange = tqdm(range(binstart, binend), unit='bin')
    else:
        binrange = range(binstart, binend)

    for j in binrange:

        k = j - binstart
        wsinx = weights*sinx

        sum_ysin[k] = npdot(wy, sinx)
        sum_ycos[k] = npdot(wy, cosx)
        sum_sin[k] = npsum(wsinx)
        sum_cos[k] = npdot(weights, cosx)
        sum_sinsin[k] = npdot(wsinx, sinx)
        sum_sincos[k] = npdot(wsinx, cosx)

        # get the state for the next bin
        if j + 1 == binend:
            pass
        elif j % resync_interval == 0:
            sinx, cosx = exact_state(times,
                                     omega_start + (j + 1.0)*omega_step)
        else:
            sinx, cosx = rotate_state(sinx, cosx, sindx, cosdx)

    return MomentSums(binstart,
                      sum_y,
                      sum_yy,
                      sum_ysin,
                      sum_ycos,
                      sum_sin,
                      sum_cos,
                      sum_sinsin,
                      sum_sincos)


def concatenate_moments(parts):
    '''This merges moment sums for adjacent bin ranges into one.

    Parameters
    ----------

    parts : sequence of MomentSums
        These must cover contiguous bin ranges and are put in bin order
        before merging. All of them must come from the same time-series, so
        their global sums `sum_y` and `sum_yy` must be identical.

    Returns
    -------

    MomentSums
        The moment sums covering all of the input ranges.

    '''

    parts = sorted(parts, key=lambda x: x.binstart)

    if len(parts) == 0:
        raise InvalidInput('no moment sums to concatenate')

    first = parts[0]

    for prev, this in zip(parts[:-1], parts[1:]):

        if this.binstart != prev.binend:
            raise InvalidInput(
                'bin ranges are not contiguous: [%s, %s) then [%s, %s)' %
                (prev.binstart, prev.binend, this.binstart, this.binend)
            )

        if this.sum_y != first.sum_y or this.sum_yy != first.sum_yy:
            raise InvalidInput('moment sums come from different time-series')

    return MomentSums(
        first.binstart,
        first.sum_y,
        first.sum_yy,
        *[npconcatenate([getattr(x, field) for x in parts])
          for field in BinMoments._fields]
    )
