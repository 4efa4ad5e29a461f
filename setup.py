# -*- coding: utf-8 -*-

'''setup.py - Oct 2026

This sets up the package.

'''
__version__ = '0.1.0'

from setuptools import setup


def readme():
    with open('README.md') as f:
        return f.read()


INSTALL_REQUIRES = [
    'numpy>=1.17',
    'matplotlib>=3.3',
    'tqdm',
]

EXTRAS_REQUIRE = {
    'test':[
        'pytest',
        'astropy>=4.0',
    ],
}


###########################
## RUN SETUP FOR GLSBASE ##
###########################

# run setup.
setup(
    name='glsbase',
    version=__version__,
    description=('Generalized Lomb-Scargle periodograms with a floating mean '
                 'for unevenly sampled time-series.'),
    long_description=readme(),
    long_description_content_type="text/markdown",
    classifiers=[
        'Development Status :: 4 - Beta',
        'License :: OSI Approved :: MIT License',
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Astronomy",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3",
    ],
    keywords='astronomy periodogram lomb-scargle',
    license='MIT',
    packages=[
        'glsbase',
        'glsbase.periodbase',
    ],
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    include_package_data=True,
    zip_safe=False,
    python_requires=">=3.7"
)
