#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# zkls.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''
Contains the Zechmeister & Kurster (2009) Generalized Lomb-Scargle periodogram
on an equidistant frequency grid, with or without a floating mean.

- :py:func:`.zk_periodogram`: the periodogram power, fitted sine and cosine
  amplitudes, and fitted constant at every frequency of the grid.

- :py:func:`.gls_pfind`: runs :py:func:`.zk_periodogram` on a mag/flux
  time-series with measurement errors and returns a standard `lspinfo` dict.

References:

- Zechmeister & Kurster, 2009, A&A 496, p. 577 (Eqs. 4-15 and A4)
- Reegen, 2007, A&A 467, p. 1353
- Lomb, 1976, Ap&SS 39, p. 447
- Scargle, 1982, ApJ 263, p. 835

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

import numpy as np
from numpy import (
    nan as npnan, pi as pi_value, isfinite as npisfinite,
    argmax as npargmax, argsort as npargsort, nonzero as npnonzero,
    full as npfull, errstate as nperrstate,
)


###################
## LOCAL IMPORTS ##
###################

from ..lcmath import sigclip_magseries
from .accumulate import accumulate_moments, RESYNC_INTERVAL
from .utils import (
    validate_inputs, center_signal, weights_from_errs,
    equidistant_frequencies, resort_by_time,
)


#####################
## SPECTRUM RESULT ##
#####################

ZKSpectrum = namedtuple('ZKSpectrum',
                        ['spectrum', 'amp_cos', 'amp_sin', 'constant'])
ZKSpectrum.__doc__ = '''The periodogram output, one element per frequency bin.

spectrum is (chi2_0 - chi2(omega))/chi2_0, amp_cos and amp_sin are the
fitted amplitudes of cos(omega t) and sin(omega t), and constant is the fitted
offset, or the weighted mean of the signal if no offset was fitted.
'''


##################
## NORMAL SOLVE ##
##################

def solve_moments(moments, mean, with_constant=True):
    '''This solves the weighted least-squares fit at every bin.

    The model is::

        y(t) = a*cos(wt) + b*sin(wt) [+ c]

    The relations used are::

        YY = sum( w_i*y_i*y_i ) - Y*Y
        YC = sum( w_i*y_i*cos(wt_i) ) - Y*C
        YS = sum( w_i*y_i*sin(wt_i) ) - Y*S

    with a floating mean::

        SS = sum( w_i*sin(wt_i)*sin(wt_i) ) - S*S
        CC = (1 - sum( w_i*sin(wt_i)*sin(wt_i) )) - C*C
        CS = sum( w_i*sin(wt_i)*cos(wt_i) ) - C*S

    and without one, the same without the S*S, C*C, C*S terms. Then::

        D(omega) = CC*SS - CS*CS
        P(omega) = (SS*YC*YC + CC*YS*YS - 2.0*CS*YC*YS)/(YY*D)
        a = (YC*SS - YS*CS)/D
        b = (YS*CC - YC*CS)/D
        c = Y - a*C - b*S + mean

    Bins where D == 0 get non-finite values. These are not errors.

    Parameters
    ----------

    moments : MomentSums
        The accumulated sums from
        :py:func:`glsbase.periodbase.accumulate.accumulate_moments`.

    mean : float
        The weighted mean that was subtracted from the signal.

    with_constant : bool
        If True, fits a floating constant along with the sinusoid.

    Returns
    -------

    ZKSpectrum
        The spectrum, amplitudes, and constants for the bins in `moments`.

    '''

    sum_y = moments.sum_y
    sum_sin = moments.sum_sin
    sum_cos = moments.sum_cos
    sum_sinsin = moments.sum_sinsin

    YY = moments.sum_yy - sum_y*sum_y
    YS = moments.sum_ysin - sum_y*sum_sin
    YC = moments.sum_ycos - sum_y*sum_cos

    if with_constant:
        SS = sum_sinsin - sum_sin*sum_sin
        CC = (1.0 - sum_sinsin) - sum_cos*sum_cos
        CS = moments.sum_sincos - sum_cos*sum_sin
    else:
        SS = sum_sinsin
        CC = 1.0 - sum_sinsin
        CS = moments.sum_sincos

    # singular bins turn into nan/inf
    with nperrstate(divide='ignore', invalid='ignore'):

        D = CC*SS - CS*CS
        spectrum = (SS*YC*YC + CC*YS*YS - 2.0*CS*YC*YS)/(YY*D)
        amp_cos = (YC*SS - YS*CS)/D
        amp_sin = (YS*CC - YC*CS)/D

        if with_constant:
            constant = sum_y - amp_cos*sum_cos - amp_sin*sum_sin + mean
        else:
            constant = npfull(spectrum.size, mean)

    return ZKSpectrum(spectrum, amp_cos, amp_sin, constant)


########################
## THE ZK PERIODOGRAM ##
########################

def zk_periodogram(times,
                   signal,
                   weights,
                   freq_start,
                   freq_step,
                   num_freq,
                   with_constant=True,
                   resync_interval=RESYNC_INTERVAL,
                   verbose=False):
    '''This calculates the generalized Lomb-Scargle periodogram.

    Uses the algorithm from Zechmeister and Kurster (2009) on the equidistant
    frequency grid `freq_start + j*freq_step`, j = 0 ... `num_freq` - 1.

    Parameters
    ----------

    times : sequence of floats
        The times of the measurements, not necessarily equidistant. No
        reference epoch is subtracted, do this yourself beforehand.

    signal : sequence of floats
        The measurements. The weighted mean is subtracted here, so this doesn't
        need to be done beforehand.

    weights : sequence of floats
        The weights of the measurements. These must be normalized to sum to 1,
        e.g. ``w_i = 1/(W*sigma_i**2)`` with ``W = sum(1/sigma_i**2)``. Use
        :py:func:`glsbase.periodbase.utils.weights_from_errs` to get these.

    freq_start : float
        The first frequency of the grid, in cycles per unit of `times` (this
        is not an angular frequency). This must be > 0 to be meaningful.

    freq_step : float
        The frequency step of the grid. Must be > 0.

    num_freq : int
        The number of frequencies in the grid. Must be >= 1.

    with_constant : bool
        If True, models the signal as a sinusoid plus a constant. If False,
        only uses a sinusoid.

    resync_interval : int
        The sin() and cos() values are advanced from one frequency to the next
        with the angle-addition formulas, and recomputed exactly after every
        bin j where ``j % resync_interval == 0``. See
        :py:mod:`glsbase.periodbase.accumulate`.

    verbose : bool
        If True, shows a progress bar over the frequency grid.

    Returns
    -------

    ZKSpectrum
        A namedtuple of four np.arrays of length `num_freq`, aligned with the
        frequency grid::

            (spectrum -> (chi2_0 - chi2(omega))/chi2_0,
             amp_cos -> fitted amplitude of the cosine term,
             amp_sin -> fitted amplitude of the sine term,
             constant -> fitted constant, or the weighted mean of the signal
                         repeated num_freq times if with_constant is False)

        Bins where the least-squares problem is singular get nan or inf
        values.

    Raises
    ------

    InvalidInput
        If `times` is empty, if the lengths of `times`, `signal`, and `weights`
        don't match, if `freq_step` <= 0, or if `num_freq` < 1.

    '''

    times, signal, weights = validate_inputs(times,
                                             signal,
                                             weights,
                                             freq_start,
                                             freq_step,
                                             num_freq)

    # w = 2 pi f, dw = 2 pi df
    omega_start = freq_start * 2.0 * pi_value
    omega_step = freq_step * 2.0 * pi_value

    y, mean = center_signal(signal, weights)

    if verbose:
        LOGINFO('evaluating %s frequencies from %.6g to %.6g '
                'for %s measurements, with_constant = %s' %
                (num_freq,
                 freq_start,
                 freq_start + (num_freq - 1)*freq_step,
                 times.size,
                 with_constant))

    moments = accumulate_moments(times,
                                 y,
                                 weights,
                                 omega_start,
                                 omega_step,
                                 num_freq,
                                 resync_interval=resync_interval,
                                 verbose=verbose)

    result = solve_moments(moments, mean, with_constant=with_constant)

    nbad = result.spectrum.size - npisfinite(result.spectrum).sum()
    if nbad > 0:
        LOGWARNING('%s of %s frequency bins have non-finite periodogram '
                   'values, the fit is singular there' %
                   (nbad, result.spectrum.size))

    LOGDEBUG('done with periodogram for %s frequencies' % num_freq)

    return result


###################
## LSPINFO DICTS ##
###################

def _nbest_peaks(periods, lspvals, nbestpeaks, periodepsilon):
    '''This finds the best peaks of the periodogram.

    Goes down the finite values sorted by power until we find `nbestpeaks`
    values that are separated by at least `periodepsilon` in period.

    '''

    finitepeakind = npisfinite(lspvals)
    finlsp = lspvals[finitepeakind]
    finperiods = periods[finitepeakind]

    # raises ValueError if there are no finite values
    bestperiodind = npargmax(finlsp)

    sortedlspind = npargsort(finlsp)[::-1]
    sortedlspperiods = finperiods[sortedlspind]
    sortedlspvals = finlsp[sortedlspind]

    nbestperiods, nbestlspvals, peakcount = (
        [finperiods[bestperiodind]],
        [finlsp[bestperiodind]],
        1
    )
    prevperiod = sortedlspperiods[0]

    for period, lspval in zip(sortedlspperiods, sortedlspvals):

        if peakcount == nbestpeaks:
            break
        perioddiff = abs(period - prevperiod)
        bestperiodsdiff = [abs(period - x) for x in nbestperiods]

        # this period must be away from the last period and from all the
        # other best periods to count as a separate peak
        if (perioddiff > (periodepsilon*prevperiod) and
            all(x > (periodepsilon*period) for x in bestperiodsdiff)):
            nbestperiods.append(period)
            nbestlspvals.append(lspval)
            peakcount = peakcount + 1

        prevperiod = period

    return (finperiods[bestperiodind], finlsp[bestperiodind],
            nbestperiods, nbestlspvals)


def gls_pfind(times,
              mags,
              errs,
              freq_start,
              freq_step,
              num_freq,
              with_constant=True,
              magsarefluxes=False,
              sigclip=None,
              epoch=None,
              nbestpeaks=5,
              periodepsilon=0.1,
              resync_interval=RESYNC_INTERVAL,
              verbose=True):
    '''This runs the generalized Lomb-Scargle periodogram on a time-series.

    The weights are taken from the measurement errors, and the times are
    referenced to `epoch` before running :py:func:`.zk_periodogram`.

    Parameters
    ----------

    times,mags,errs : np.array
        The mag/flux time-series with associated measurement errors to run the
        period-finding on.

    freq_start,freq_step,num_freq : float, float, int
        The equidistant frequency grid to use, in cycles per unit of `times`.

    with_constant : bool
        If True, fits a floating mean along with the sinusoid.

    magsarefluxes : bool
        If the input measurement values in `mags` and `errs` are in fluxes, set
        this to True.

    sigclip : float or int or sequence of two floats/ints or None
        If a single float or int, a symmetric sigma-clip will be performed using
        the number provided as the sigma-multiplier to cut out from the input
        time-series.

        If a list of two ints/floats is provided, the function will perform an
        'asymmetric' sigma-clip. The first element in this list is the sigma
        value to use for fainter flux/mag values; the second element in this
        list is the sigma value to use for brighter flux/mag values.

        If `sigclip` is None, no sigma-clipping will be performed, and the
        time-series (with non-finite elems removed) will be passed through.

    epoch : float or None
        The reference time subtracted from `times`. If None, the earliest time
        is used.

    nbestpeaks : int
        The number of 'best' peaks to return from the periodogram results,
        starting from the global maximum of the periodogram peak values.

    periodepsilon : float
        The fractional difference between successive values of 'best' periods
        when sorting by periodogram power to consider them as separate periods
        (as opposed to part of the same periodogram peak).

    resync_interval : int
        Passed through to :py:func:`.zk_periodogram`.

    verbose : bool
        If this is True, will indicate progress and details about the frequency
        grid used for the period search.

    Returns
    -------

    dict
        This function returns a dict, referred to as an `lspinfo` dict in other
        glsbase functions that operate on periodogram results::

            {'bestperiod': the best period value in the periodogram,
             'bestlspval': the periodogram peak associated with the best period,
             'nbestpeaks': the input value of nbestpeaks,
             'nbestlspvals': nbestpeaks-size list of best period peak values,
             'nbestperiods': nbestpeaks-size list of best periods,
             'lspvals': the full array of periodogram powers,
             'frequencies': the full array of frequencies considered,
             'periods': the full array of periods considered,
             'omegas': the full array of angular frequencies considered,
             'amp_cos': the fitted cosine amplitude at each frequency,
             'amp_sin': the fitted sine amplitude at each frequency,
             'constant': the fitted constant at each frequency,
             'epoch': the reference time subtracted from times,
             'method':'zgls' -> the name of the period-finder method,
             'kwargs':{ dict of all of the input kwargs for record-keeping}}

    '''

    # fail early on a bad grid even if the time-series turns out to be bad
    validate_inputs([0.0], [0.0], [1.0], freq_start, freq_step, num_freq)

    kwargs = {'freq_start':freq_start,
              'freq_step':freq_step,
              'num_freq':num_freq,
              'with_constant':with_constant,
              'sigclip':sigclip,
              'nbestpeaks':nbestpeaks,
              'periodepsilon':periodepsilon,
              'resync_interval':resync_interval}

    lspinfo = {'bestperiod':npnan,
               'bestlspval':npnan,
               'nbestpeaks':nbestpeaks,
               'nbestlspvals':None,
               'nbestperiods':None,
               'lspvals':None,
               'frequencies':None,
               'periods':None,
               'omegas':None,
               'amp_cos':None,
               'amp_sin':None,
               'constant':None,
               'epoch':epoch,
               'method':'zgls',
               'kwargs':kwargs}

    # get rid of nans first and sigclip
    stimes, smags, serrs = sigclip_magseries(np.asarray(times, dtype=float),
                                             np.asarray(mags, dtype=float),
                                             np.asarray(errs, dtype=float),
                                             magsarefluxes=magsarefluxes,
                                             sigclip=sigclip)
    stimes, smags, serrs = resort_by_time(stimes, smags, serrs)

    # get rid of zero errs
    nzind = npnonzero(serrs)
    stimes, smags, serrs = stimes[nzind], smags[nzind], serrs[nzind]

    # we fit up to three parameters
    if stimes.size < 3:
        LOGERROR('only %s good detections for these times and mags, '
                 'skipping...' % stimes.size)
        return lspinfo

    if epoch is None:
        epoch = stimes.min()
    lspinfo['epoch'] = epoch

    weights = weights_from_errs(serrs)

    result = zk_periodogram(stimes - epoch,
                            smags,
                            weights,
                            freq_start,
                            freq_step,
                            num_freq,
                            with_constant=with_constant,
                            resync_interval=resync_interval,
                            verbose=verbose)

    frequencies = equidistant_frequencies(freq_start, freq_step, num_freq)
    with nperrstate(divide='ignore'):
        periods = 1.0/frequencies

    lspinfo.update({'lspvals':result.spectrum,
                    'frequencies':frequencies,
                    'periods':periods,
                    'omegas':2.0*pi_value*frequencies,
                    'amp_cos':result.amp_cos,
                    'amp_sin':result.amp_sin,
                    'constant':result.constant})

    try:

        bestperiod, bestlspval, nbestperiods, nbestlspvals = _nbest_peaks(
            periods,
            result.spectrum,
            nbestpeaks,
            periodepsilon
        )

    except ValueError:

        LOGERROR('no finite periodogram values '
                 'for this mag series, skipping...')
        return lspinfo

    lspinfo.update({'bestperiod':bestperiod,
                    'bestlspval':bestlspval,
                    'nbestlspvals':nbestlspvals,
                    'nbestperiods':nbestperiods})

    if verbose:
        LOGINFO('best period = %.6f, power = %.4f' % (bestperiod, bestlspval))

    return lspinfo
