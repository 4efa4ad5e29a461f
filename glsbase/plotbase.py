#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# plotbase.py - Oct 2026
# License: MIT.

'''
Contains functions for plotting periodograms.

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

import os
import os.path
import pickle

import numpy as np

# FIXME: enforce no display for now
import matplotlib
matplotlib.use('Agg')

import matplotlib.pyplot as plt


##################
## PERIODOGRAMS ##
##################

PLOTYLABELS = {'zgls':r'GLS power $(\chi^2_0 - \chi^2)/\chi^2_0$'}

METHODLABELS = {'zgls':'Zechmeister-Kurster generalized Lomb-Scargle'}

METHODSHORTLABELS = {'zgls':'Generalized L-S'}


def plot_periodbase_lsp(lspinfo, outfile=None, plotdpi=100):

    '''Makes a plot of periodograms obtained from `periodbase` functions.

    This takes the output dict produced by a `glsbase.periodbase` period-finder
    function or a pickle filename containing such a dict and makes a
    periodogram plot.

    Parameters
    ----------

    lspinfo : dict or str
        If lspinfo is a dict, it must be a dict produced by
        :py:func:`glsbase.periodbase.gls_pfind` or a dict of the form below
        with at least these keys::

            {'periods': np.array of all periods searched by the period-finder,
             'lspvals': np.array of periodogram power value for each period,
             'bestperiod': a float value that is the period with the highest
                           peak in the periodogram,
             'method': a code naming the period-finder used; must be one of
                       the keys in the `METHODLABELS` dict above,
             'nbestperiods': a list of the periods corresponding to periodogram
                             peaks (`nbestlspvals` below) to annotate on the
                             periodogram plot,
             'nbestlspvals': a list of the power values associated with
                             periodogram peaks to annotate on the periodogram
                             plot; should be the same length as `nbestperiods`}

        If lspinfo is a str, then it must be a path to a pickle file that
        contains a dict of the form described above.

    outfile : str or None
        If this is a str, will write the periodogram plot to the file specified
        by this string. If this is None, will write to a file called
        'lsp-plot.png' in the current working directory.

    plotdpi : int
        Sets the resolution in DPI of the output periodogram plot PNG file.

    Returns
    -------

    str or None
        Absolute path to the periodogram plot file created, or None if the
        plot could not be made.

    '''

    # get the lspinfo from a pickle file transparently
    if isinstance(lspinfo,str) and os.path.exists(lspinfo):
        LOGINFO('loading LSP info from pickle %s' % lspinfo)
        with open(lspinfo,'rb') as infd:
            lspinfo = pickle.load(infd)

    if not isinstance(lspinfo, dict) or lspinfo.get('lspvals') is None:
        LOGERROR('no periodogram values in this lspinfo, not plotting')
        return None

    try:

        # get the things to plot out of the data
        periods = np.asarray(lspinfo['periods'], dtype=float)
        lspvals = np.asarray(lspinfo['lspvals'], dtype=float)
        bestperiod = lspinfo['bestperiod']
        lspmethod = lspinfo['method']

        # only plot the finite parts
        finind = np.isfinite(periods) & np.isfinite(lspvals) & (periods > 0)

        fig = plt.figure()

        plt.plot(periods[finind], lspvals[finind])
        plt.xscale('log', base=10)
        plt.xlabel('Period')
        plt.ylabel(PLOTYLABELS[lspmethod])
        plottitle = '%s best period: %.6f' % (METHODSHORTLABELS[lspmethod],
                                              bestperiod)
        plt.title(plottitle)

        # show the best peaks on the plot
        for bestperiod, bestpeak in zip(lspinfo['nbestperiods'],
                                        lspinfo['nbestlspvals']):

            plt.annotate('%.6f' % bestperiod,
                         xy=(bestperiod, bestpeak), xycoords='data',
                         xytext=(0.0,25.0), textcoords='offset points',
                         arrowprops=dict(arrowstyle="->"),
                         fontsize='x-small')

        # make a grid
        plt.grid(color='#a9a9a9',
                 alpha=0.9,
                 zorder=0,
                 linewidth=1.0,
                 linestyle=':')

        if not (outfile and isinstance(outfile, str)):
            LOGWARNING('no output file specified, '
                       'saving to lsp-plot.png in current directory')
            outfile = 'lsp-plot.png'

        if outfile.endswith('.png'):
            plt.savefig(outfile,bbox_inches='tight',dpi=plotdpi)
        else:
            plt.savefig(outfile,bbox_inches='tight')

        plt.close(fig)
        return os.path.abspath(outfile)

    except Exception:

        LOGEXCEPTION('could not plot this LSP, appears to be empty')
        plt.close('all')
        return None
