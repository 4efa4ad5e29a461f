#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# lcmath.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''
Contains tools to clean up time-series before they go to the period-finders
(removing non-finite measurements and sigma-clipping).

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

from numpy import (
    isfinite as npisfinite, median as npmedian, abs as npabs,
)


####################
## SIGMA-CLIPPING ##
####################

def sigclip_magseries(times, mags, errs,
                      sigclip=None,
                      magsarefluxes=False):
    '''Sigma-clips a magnitude or flux time-series.

    Selects the finite times, magnitudes (or fluxes), and errors from the passed
    values, and apply symmetric or asymmetric sigma clipping to them. The
    center and spread are the median and 1.483 x the median absolute
    deviation.

    Parameters
    ----------

    times,mags,errs : np.array
        The magnitude or flux time-series arrays to sigma-clip. All of these
        arrays will have their non-finite elements removed, and then will be
        sigma-clipped based on the arguments to this function.

        `errs` is optional. Set it to None if you don't have values for these.

    sigclip : float or int or sequence of two floats/ints or None
        If a single float or int, a symmetric sigma-clip will be performed using
        the number provided as the sigma-multiplier to cut out from the input
        time-series.

        If a list of two ints/floats is provided, the function will perform an
        'asymmetric' sigma-clip. The first element in this list is the sigma
        value to use for fainter flux/mag values; the second element in this
        list is the sigma value to use for brighter flux/mag values. For
        example, `sigclip=[10., 3.]`, will sigclip out greater than 10-sigma
        dimmings and greater than 3-sigma brightenings. Here the meaning of
        "dimming" and "brightening" is set by *physics* (not the magnitude
        system), which is why the `magsarefluxes` kwarg must be correctly set.

        If `sigclip` is None, no sigma-clipping will be performed, and the
        time-series (with non-finite elems removed) will be passed through to
        the output.

    magsarefluxes : bool
        True if your "mags" are in fact fluxes, i.e. if "fainter" corresponds to
        `mags` getting smaller.

    Returns
    -------

    (stimes, smags, serrs) : tuple
        The sigma-clipped and nan-stripped time-series. `serrs` is None if
        `errs` was None.

    '''

    returnerrs = errs is not None

    # filter the input times, mags, errs
    find = npisfinite(times) & npisfinite(mags)
    if returnerrs:
        find = find & npisfinite(errs)

    ftimes, fmags = times[find], mags[find]
    ferrs = errs[find] if returnerrs else None

    if ftimes.size == 0:
        LOGERROR('measurements are all nan!')
        return ftimes, fmags, ferrs

    # stddev = 1.483 x MAD
    center_mag = npmedian(fmags)
    stddev_mag = (npmedian(npabs(fmags - center_mag))) * 1.483

    if sigclip and isinstance(sigclip, (float, int)):

        sigind = (npabs(fmags - center_mag)) < (sigclip * stddev_mag)

    # this handles sigclipping for asymmetric +ve and -ve clip values
    elif sigclip and isinstance(sigclip, (list,tuple)) and len(sigclip) == 2:

        # sigclip is passed as [dimmingclip, brighteningclip]
        dimmingclip = sigclip[0]
        brighteningclip = sigclip[1]

        if magsarefluxes:
            nottoodimind = (
                (fmags - center_mag) > (-dimmingclip*stddev_mag)
            )
            nottoobrightind = (
                (fmags - center_mag) < (brighteningclip*stddev_mag)
            )
        else:
            nottoodimind = (
                (fmags - center_mag) < (dimmingclip*stddev_mag)
            )
            nottoobrightind = (
                (fmags - center_mag) > (-brighteningclip*stddev_mag)
            )

        sigind = nottoodimind & nottoobrightind

    else:

        if sigclip:
            LOGWARNING('unrecognized sigclip value: %r, not sigma-clipping' %
                       (sigclip,))

        return ftimes, fmags, ferrs

    stimes = ftimes[sigind]
    smags = fmags[sigind]
    serrs = ferrs[sigind] if returnerrs else None

    LOGDEBUG('sigclip = %r: kept %s of %s finite measurements' %
             (sigclip, stimes.size, ftimes.size))

    return stimes, smags, serrs
