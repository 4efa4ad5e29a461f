'''test_plotbase.py - Oct 2026
License: MIT - see the LICENSE file for details.

This tests the following:

- makes a periodogram plot from a gls_pfind lspinfo dict and from a pickle
- checks that an empty lspinfo doesn't make a plot

'''

import os.path
import pickle

import numpy as np

from glsbase import periodbase
from glsbase.plotbase import plot_periodbase_lsp


def make_lspinfo():
    '''
    This runs gls_pfind on a fake sinusoidal light curve.

    '''

    rng = np.random.default_rng(9)
    times = np.sort(rng.uniform(0.0, 20.0, 120))
    errs = np.full(times.size, 0.02)
    mags = 0.2*np.cos(2.0*np.pi*times/0.8) + rng.normal(0.0, 0.02, times.size)

    return periodbase.gls_pfind(times, mags, errs, 0.1, 2.0e-3, 1000,
                                verbose=False)


###########
## TESTS ##
###########

def test_plot_lspinfo(tmp_path):
    '''
    Tests plotting an lspinfo dict.

    '''

    outfile = str(tmp_path / 'gls.png')
    plotfile = plot_periodbase_lsp(make_lspinfo(), outfile=outfile)

    assert plotfile == os.path.abspath(outfile)
    assert os.path.exists(plotfile)
    assert os.path.getsize(plotfile) > 0


def test_plot_pickle(tmp_path):
    '''
    Tests plotting an lspinfo dict from a pickle.

    '''

    picklefile = str(tmp_path / 'gls.pkl')
    with open(picklefile, 'wb') as outfd:
        pickle.dump(make_lspinfo(), outfd)

    outfile = str(tmp_path / 'gls-from-pickle.png')
    plotfile = plot_periodbase_lsp(picklefile, outfile=outfile)

    assert os.path.exists(plotfile)


def test_plot_empty(tmp_path):
    '''
    Tests that an lspinfo without periodogram values isn't plotted.

    '''

    lspinfo = periodbase.gls_pfind(np.array([1.0, 2.0]),
                                   np.array([10.0, 10.1]),
                                   np.array([0.01, 0.01]),
                                   0.1, 0.01, 10,
                                   verbose=False)

    outfile = str(tmp_path / 'empty.png')

    assert plot_periodbase_lsp(lspinfo, outfile=outfile) is None
    assert not os.path.exists(outfile)
