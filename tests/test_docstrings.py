import doctest

import pytest

import autowire
from autowire import config_store, container, instance_cache, registry


@pytest.mark.parametrize("module", [autowire, config_store, container, instance_cache, registry])
def test_docstring_examples_run(module):
    result = doctest.testmod(module)

    assert result.attempted > 0
    assert result.failed == 0
