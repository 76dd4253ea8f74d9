import logging

import pytest


@pytest.fixture(autouse=True)
def _reset_root_handlers():
    # The CLI installs a stream handler bound to CliRunner's captured stderr.
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
    root.setLevel(level)
