#
# Copyright (c) 2025 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


from .common import *
from .brackets import *
from .tables import *
from .events import *

from . import vacation, thirteenth, termination, payroll, simples, summary
