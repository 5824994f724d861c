#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
textlab package

Pure text transformation and analysis routines used by textLab.py. Every
module here is stateless: the only shared data are the immutable lexicons
in textlab.lexical.
"""

from __future__ import annotations

VERSION = "1.0.0"
