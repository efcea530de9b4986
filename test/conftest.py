import os
import shutil

import pygit2
import pytest

from gitlanes import settings


def setUpGitConfigSearchPaths(prefix=""):
    # Don't let unit tests access host system's git config
    levels = [
        pygit2.enums.ConfigLevel.GLOBAL,
        pygit2.enums.ConfigLevel.XDG,
        pygit2.enums.ConfigLevel.SYSTEM,
        pygit2.enums.ConfigLevel.PROGRAMDATA,
    ]
    for level in levels:
        if prefix:
            path = f"{prefix}_{level.name}"
        else:
            path = ""
        pygit2.settings.search_path[level] = path


@pytest.fixture(scope='session', autouse=True)
def maskHostGitConfig():
    setUpGitConfigSearchPaths("")


@pytest.fixture(autouse=True)
def defaultPrefs():
    """ Every test starts out with factory prefs, and can't see the user's prefs file. """
    assert settings.TEST_MODE
    settings.prefs.reset()
    yield settings.prefs
    prefsDir = settings.prefs.getParentDir()
    settings.prefs.reset()
    shutil.rmtree(prefsDir, ignore_errors=True)


@pytest.fixture
def tempRepoDir(tmp_path) -> str:
    path = os.path.realpath(tmp_path / "TestGitRepository")
    os.makedirs(path)
    return path
