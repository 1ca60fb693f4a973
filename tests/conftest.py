import os
from unittest.mock import patch

import pytest


@pytest.fixture(autouse=True)
def isolate_home_config(tmp_path):
    """Point the global config directory at a temporary location.

    Tests must never read or write the real ``~/.commiat`` directory,
    and ``COMMIAT_*`` variables from the developer's shell must not leak
    into the configuration under test.
    """
    config_dir = tmp_path / "home" / ".commiat"
    with patch.dict(os.environ):
        for key in [k for k in os.environ if k.startswith("COMMIAT_")]:
            del os.environ[key]
        with patch("commiat.config.loader._get_config_directory", return_value=config_dir):
            yield config_dir
