#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import os


# JSON file with the tax tables to use instead of the built-in ones
tables_path: str|None = os.environ.get('FOLHA_TABLES') or None
