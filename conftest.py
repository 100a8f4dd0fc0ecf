#
# Copyright (c) 2023 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import os.path
import sys
import pytest


here = os.path.dirname(__file__)
sys.path.insert(0, here)


pytest.register_assert_rewrite("folha")


@pytest.fixture(autouse=True)
def builtin_tables(monkeypatch):
    # Tests use the built-in tables regardless of $FOLHA_TABLES
    import environ
    monkeypatch.setattr(environ, 'tables_path', None)
