#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# utils.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''This contains some utilities for periodbase functions.

- :py:func:`.validate_inputs`: checks the preconditions of the periodogram
  before any computation is done.

- :py:func:`.weighted_mean` and :py:func:`.center_signal`: remove the
  weighted mean from a signal.

- :py:func:`.weights_from_errs`: turns measurement errors into normalized
  weights.

- :py:func:`.equidistant_frequencies`: expands an equidistant frequency grid
  into the frequencies that line up with the periodogram output.

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

from numbers import Integral

import numpy as np


###################
## LOCAL IMPORTS ##
###################

from ..errors import InvalidInput


#######################
## UTILITY FUNCTIONS ##
#######################

def resort_by_time(times, mags, errs):
    '''
    Resorts the input arrays so they're in time order.

    NOTE: the input arrays must not have nans in them.

    Parameters
    ----------

    times,mags,errs : np.arrays
        The times, mags, and errs arrays to resort by time. The times array is
        assumed to be the first one in the input args.

    Returns
    -------

    times,mags,errs : np.arrays
        The resorted times, mags, errs arrays.

    '''

    sort_order = np.argsort(times, kind='mergesort')
    times, mags, errs = times[sort_order], mags[sort_order], errs[sort_order]

    return times, mags, errs


def _as_float_array(values, name):
    '''
    Turns a sequence into a 1-D float64 array or raises InvalidInput.

    '''

    try:
        arr = np.array(values, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise InvalidInput('%s could not be converted to floats: %s' %
                           (name, e))

    if arr.ndim != 1:
        raise InvalidInput('%s must be one-dimensional, got shape %s' %
                           (name, arr.shape))

    return arr


def validate_inputs(times,
                    signal,
                    weights,
                    freq_start,
                    freq_step,
                    num_freq):
    '''This checks the preconditions of the periodogram.

    Nothing is computed if any of these fail.

    Parameters
    ----------

    times,signal,weights : sequence of floats
        The time-series and its normalized weights.

    freq_start,freq_step : float
        The first frequency of the grid and the grid spacing, in cycles per
        unit of `times`.

    num_freq : int
        The number of frequencies in the grid.

    Returns
    -------

    (times, signal, weights) : tuple of np.arrays
        Fresh float64 copies of the inputs.

    Raises
    ------

    InvalidInput
        If `times` is empty, if `signal` or `weights` don't have the same
        length as `times`, if `freq_step` is not strictly positive, or if
        `num_freq` is not an integer >= 1.

    '''

    times = _as_float_array(times, 'times')
    signal = _as_float_array(signal, 'signal')
    weights = _as_float_array(weights, 'weights')

    if times.size == 0:
        raise InvalidInput('times is empty')

    if signal.size != times.size:
        raise InvalidInput(
            'signal has %s elements but times has %s' %
            (signal.size, times.size)
        )

    if weights.size != times.size:
        raise InvalidInput(
            'weights has %s elements but times has %s' %
            (weights.size, times.size)
        )

    # this also catches nan
    if not freq_step > 0.0:
        raise InvalidInput('freq_step must be > 0, got %r' % freq_step)

    if (isinstance(num_freq, bool) or
        not isinstance(num_freq, Integral) or
        num_freq < 1):
        raise InvalidInput('num_freq must be an integer >= 1, got %r' %
                           num_freq)

    if not freq_start > 0.0:
        LOGWARNING('freq_start = %r is not > 0, '
                   'the first frequency bin will be meaningless' % freq_start)

    return times, signal, weights


def weighted_mean(signal, weights):
    '''
    Returns sum(w_i*y_i). The weights must already sum to 1.

    '''
    return np.dot(signal, weights)


def center_signal(signal, weights):
    '''This subtracts the weighted mean from the signal.

    No renormalization of the weights is done, so they must sum to 1.

    Parameters
    ----------

    signal,weights : np.array
        The signal and its normalized weights.

    Returns
    -------

    (centered, mean) : tuple
        `centered` is `signal - mean`, `mean` is the weighted mean.

    '''

    mean = weighted_mean(signal, weights)
    return signal - mean, mean


def weights_from_errs(errs):
    '''This turns measurement errors into the normalized weights.

    The relations used are::

        W = sum( 1.0/(errs*errs) )
        w_i = (1/W)*(1/(errs_i*errs_i))

    Parameters
    ----------

    errs : np.array
        The measurement errors. These must all be finite and non-zero.

    Returns
    -------

    np.array
        The weights, summing to 1.

    '''

    errs = _as_float_array(errs, 'errs')

    if errs.size == 0:
        raise InvalidInput('errs is empty')

    if not np.all(np.isfinite(errs)) or np.any(errs == 0.0):
        raise InvalidInput('errs must all be finite and non-zero')

    one_over_errs2 = 1.0/(errs*errs)
    return one_over_errs2/np.sum(one_over_errs2)


def equidistant_frequencies(freq_start, freq_step, num_freq):
    '''
    Returns the frequencies freq_start + j*freq_step for j in 0..num_freq-1.

    '''
    return freq_start + freq_step*np.arange(num_freq, dtype=np.float64)
