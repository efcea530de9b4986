# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations as _annotations

import logging as _logging
from collections import defaultdict as _defaultdict

from pygit2 import (
    Commit,
    GitError,
    InvalidSpecError,
    Oid,
    Repository as _VanillaRepository,
    Signature,
    Walker,

    __version__ as PYGIT2_VERSION,
    LIBGIT2_VERSION,
)

from pygit2.enums import (
    RepositoryOpenFlag,
    SortMode,
)

_logger = _logging.getLogger(__name__)


class RefPrefix:
    HEADS = "refs/heads/"
    REMOTES = "refs/remotes/"
    TAGS = "refs/tags/"

    @classmethod
    def split(cls, refname: str) -> tuple[str, str]:
        for prefix in cls.HEADS, cls.REMOTES, cls.TAGS:
            if refname.startswith(prefix):
                return prefix, refname[len(prefix):]
        return "", refname


class Repo(_VanillaRepository):
    """
    Drop-in replacement for pygit2.Repository with convenient front-ends to
    the few queries needed to walk the commit log.
    """

    @property
    def head_commit(self) -> Commit:
        return self.head.peel(Commit)

    def map_refs_to_ids(self) -> dict[str, Oid]:
        """
        Return commit oids at the tip of all branches, tags, etc. in the repository.

        To ensure a consistent outcome across multiple walks of the same commit graph,
        the oids are sorted by ascending commit time.
        """

        tips: list[tuple[str, Commit]] = []

        for ref in self.listall_reference_objects():
            if (type(ref.target) is not Oid  # Skip symbolic references
                    or ref.name == "refs/stash"):  # Stash commits would clutter the log
                continue

            try:
                commit: Commit = ref.peel(Commit)
                tips.append((ref.name, commit))
            except InvalidSpecError as e:
                # Some refs might not be committish, e.g. in linux's source repo
                _logger.info(f"{e} - Skipping ref '{ref.name}'")

        # Always add 'HEAD' if we have one.
        # Do so *just* before reinserting the tips in chronological order below.
        # This causes the checked-out branch to be sorted more favorably if
        # there is another tip that shares the exact same timestamp.
        try:
            tips.append(("HEAD", self.head_commit))
        except (GitError, InvalidSpecError):
            pass  # Skip unborn head

        # Reinsert all tips in chronological order
        tips.sort(key=lambda item: item[1].commit_time)
        return dict((ref, commit.id) for ref, commit in tips)

    def map_commits_to_refs(self, refsToIds: dict[str, Oid]) -> dict[Oid, list[str]]:
        """ Invert map_refs_to_ids, keeping full ref names (except 'HEAD'). """
        refsByCommit = _defaultdict(list)
        for refname, oid in refsToIds.items():
            if refname == "HEAD" or refname.endswith("/HEAD"):
                continue
            refsByCommit[oid].append(refname)
        for refs in refsByCommit.values():
            refs.sort()
        return refsByCommit

    def walk_tips(self, tips: list[Oid], chronological: bool) -> Walker:
        sorting = SortMode.TOPOLOGICAL

        if chronological:
            # In strictly chronological ordering, a commit may appear before its
            # children if it was "created" later than its children. The layout
            # engine produces garbage in this case. So, for chronological
            # ordering, keep TOPOLOGICAL in addition to TIME.
            sorting |= SortMode.TIME

        walker = self.walk(None, sorting)

        # In topological mode, the order in which the tips are pushed is
        # significant (last in, first out). The tips should be pre-sorted in
        # ASCENDING chronological order so that the latest modified branches
        # come out at the top of the graph in topological mode.
        for tip in tips:
            walker.push(tip)

        return walker
