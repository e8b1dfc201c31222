#!/usr/bin/env python3

# Copyright (C) The thorsig developers
#
# This file is part of thorsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of thorsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the thorsig package."

import logging

name = "thorsig"
__version__ = "2024.3.1"
__author__ = "The thorsig developers"
__author_email__ = "devs@thorsig.org"
__copyright__ = "Copyright (C) 2024 The thorsig developers"
__license__ = "MIT License"

logging.getLogger(__name__).addHandler(logging.NullHandler())
