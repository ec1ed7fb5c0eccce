import logging

import pytest


@pytest.mark.unit
@pytest.mark.parametrize("name", ["catalog", "infrastructure"])
def test_app_loggers_emit_through_root_only(name):
    app_logger = logging.getLogger(name)

    assert app_logger.handlers == []
    assert app_logger.propagate is True

