# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Retrieves pages of the commit log from a local repository.

Commits come out in topological order (children before parents), which is
what the layout engine expects.
"""

from __future__ import annotations

import itertools
import logging
import os

from gitlanes import settings
from gitlanes.graph import CommitHash, CommitRecord
from gitlanes.porcelain import Commit, GitError, Oid, RefPrefix, Repo, RepositoryOpenFlag
from gitlanes.toolbox import Benchmark

logger = logging.getLogger(__name__)


class CommitSourceError(RuntimeError):
    """ The commit log couldn't be retrieved (no repository, permission denied, corrupt objects...) """

    def __init__(self, path: str, message: str):
        super().__init__(f"{path}: {message}")
        self.path = path


def openRepo(repositoryPath: str) -> Repo:
    if not os.path.isdir(repositoryPath):
        raise CommitSourceError(repositoryPath, "no such directory")

    try:
        return Repo(repositoryPath, RepositoryOpenFlag.NO_SEARCH)
    except GitError as exc:
        raise CommitSourceError(repositoryPath, str(exc)) from exc


def commitRecordFromPygit2(commit: Commit, refsByCommit: dict[Oid, list[str]], headId: Oid | None) -> CommitRecord:
    branchRefs = []
    tagRefs = []

    for refname in refsByCommit.get(commit.id, []):
        prefix, shorthand = RefPrefix.split(refname)
        if prefix == RefPrefix.TAGS:
            tagRefs.append(shorthand)
        elif prefix in (RefPrefix.HEADS, RefPrefix.REMOTES):
            branchRefs.append(shorthand)

    hexHash = str(commit.id)

    return CommitRecord(
        hash=CommitHash(hexHash),
        parentHashes=tuple(CommitHash(str(p)) for p in commit.parent_ids),
        shortHash=hexHash[:7],
        subject=commit.message.split("\n", 1)[0].strip(),
        authorName=commit.author.name,
        authorEmail=commit.author.email,
        timestamp=commit.author.time,
        branchRefs=tuple(branchRefs),
        tagRefs=tuple(tagRefs),
        isHead=headId is not None and commit.id == headId,
    )


def getLog(repositoryPath: str, limit: int, skip: int = 0, allRefs: bool | None = None) -> list[CommitRecord]:
    """
    Return at most `limit` commits from the log, after skipping the first `skip` commits.

    Successive calls with increasing `skip` yield the same commits as one
    larger call, provided the repository doesn't change in-between.

    Raises CommitSourceError if the repository can't be read.
    """

    if limit < 0 or skip < 0:
        raise ValueError(f"limit and skip must not be negative (got limit={limit}, skip={skip})")

    if allRefs is None:
        allRefs = settings.prefs.allRefs

    repo = openRepo(repositoryPath)

    try:
        with Benchmark("getLog"):
            refsToIds = repo.map_refs_to_ids()
            headId = refsToIds.get("HEAD")

            if allRefs:
                tips = list(refsToIds.values())
            elif headId is not None:
                tips = [headId]
            else:
                tips = []

            if not tips:
                logger.info(f"{repositoryPath}: no commits to show")
                return []

            refsByCommit = repo.map_commits_to_refs(refsToIds)
            walker = repo.walk_tips(tips, settings.prefs.chronologicalOrder)

            page = [commitRecordFromPygit2(commit, refsByCommit, headId)
                    for commit in itertools.islice(walker, skip, skip + limit)]

    except GitError as exc:
        raise CommitSourceError(repositoryPath, str(exc)) from exc

    finally:
        repo.free()

    logger.debug(f"{repositoryPath}: got {len(page)} commits (skip={skip}, limit={limit})")
    return page
