#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# periodbase - Oct 2026

'''This top-level module hoists the period-finder functions up into the
``glsbase.periodbase`` namespace, so you can do::

    from glsbase import periodbase
    periodbase.<name of period-finder function>

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


####################################################
## HOIST THE FINDER FUNCTIONS INTO THIS NAMESPACE ##
####################################################

from ..errors import InvalidInput
from .accumulate import RESYNC_INTERVAL
from .utils import weights_from_errs, equidistant_frequencies
from .zkls import zk_periodogram, gls_pfind, ZKSpectrum

# used to figure out which function to run for a method name
LSPMETHODS = {
    'zgls':gls_pfind,
}
