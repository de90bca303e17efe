"""
Test package initializer.
"""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from typing import Any
from unittest import mock

from autoapprove_audit.audit_impl.settings import USER_SETTINGS_ENV


class TempDirTestCase(unittest.TestCase):
    """Base test class that provides a temporary directory for each test.

    Also patches Path.home() to return the temp directory and clears the user
    settings override, so tests never read the real editor settings.
    """

    tmpdir: Path
    _tmpdir_obj: tempfile.TemporaryDirectory[str]
    _home_patch: Any
    _env_patch: Any

    def setUp(self) -> None:
        super().setUp()
        self._tmpdir_obj = tempfile.TemporaryDirectory()
        self.tmpdir = Path(self._tmpdir_obj.name)
        self._home_patch = mock.patch.object(Path, "home", return_value=self.tmpdir)
        self._home_patch.start()
        self._env_patch = mock.patch.dict(os.environ)
        self._env_patch.start()
        os.environ.pop(USER_SETTINGS_ENV, None)

    def tearDown(self) -> None:
        self._env_patch.stop()
        self._home_patch.stop()
        self._tmpdir_obj.cleanup()
        super().tearDown()
