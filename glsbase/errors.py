#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# errors.py - Oct 2026
# License: MIT - see the LICENSE file for the full text.

'''
Exceptions raised by glsbase functions.

'''


class InvalidInput(ValueError):
    '''Raised when the inputs to a period-finder violate its preconditions.

    This is always raised before any periodogram computation starts, so no
    partial results exist when it is seen by the caller.

    '''
