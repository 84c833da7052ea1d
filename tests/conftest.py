from __future__ import annotations

import logging
from pathlib import Path

import pytest

from qingcloud_csi_disk.utils.logger import remove_handlers


FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture(autouse=True)
def _reset_package_logger():
    # The CLI installs stream handlers bound to the runner's streams.
    yield
    logger = logging.getLogger("qingcloud_csi_disk")
    remove_handlers(logger)
    logger.setLevel(logging.NOTSET)
