# -*- coding: utf-8 -*-
"""공통 픽스처"""

import pytest

from flextab import config
from flextab.model import create_table


@pytest.fixture(autouse=True)
def reset_defaults():
    """테스트마다 프로세스 기본값 초기화"""
    config.init_defaults()
    yield
    config.init_defaults()


@pytest.fixture
def rows():
    return [
        {'a': 'x', 'b': 1, 'c': 2.5},
        {'a': 'x', 'b': 2, 'c': 3.25},
        {'a': 'y', 'b': 3, 'c': 4.0},
        {'a': 'y', 'b': 1234, 'c': None},
    ]


@pytest.fixture
def ft(rows):
    return create_table(rows)
