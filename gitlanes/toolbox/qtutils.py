# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from gitlanes.qt import *


def onAppThread():
    appInstance = QCoreApplication.instance()
    return bool(appInstance and appInstance.thread() is QThread.currentThread())
