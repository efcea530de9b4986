# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
import sys
from argparse import ArgumentParser, ArgumentTypeError

from gitlanes import settings


def nonNegativeInt(text: str) -> int:
    value = int(text)
    if value < 0:
        raise ArgumentTypeError(f"must not be negative: {value}")
    return value


def describeCommit(commit) -> str:
    refs = []
    if commit.isHead:
        refs.append("HEAD")
    refs.extend(commit.branchRefs)
    refs.extend(f"tag: {t}" for t in commit.tagRefs)

    text = commit.shortHash
    if refs:
        text += " (" + ", ".join(refs) + ")"
    return text + " " + commit.subject


def main(argv=None):
    from gitlanes import APP_VERSION
    from gitlanes.porcelain import PYGIT2_VERSION, LIBGIT2_VERSION
    from gitlanes.qt import QT_BINDING, QT_BINDING_VERSION

    parser = ArgumentParser(prog="gitlanes", description="Print the commit graph of a Git repository")
    parser.add_argument("repo", nargs="?", default=".", help="Path to the repository's working directory")
    parser.add_argument("-n", "--limit", type=nonNegativeInt, default=0, help="Number of commits to show (default: page size from prefs)")
    parser.add_argument("-s", "--skip", type=nonNegativeInt, default=0, help="Number of commits to skip")
    parser.add_argument("--head-only", action="store_true", help="Only show commits reachable from HEAD")
    parser.add_argument("--debug", action="store_true", help="Verbose logging and expensive assertions")
    parser.add_argument("--version", action="version",
                        version=f"gitlanes {APP_VERSION} (pygit2 {PYGIT2_VERSION}, libgit2 {LIBGIT2_VERSION}, "
                                f"{QT_BINDING} {QT_BINDING_VERSION})")
    args = parser.parse_args(argv)

    settings.prefs.load()

    if args.debug:
        settings.DEVDEBUG = True
        level = logging.DEBUG
    else:
        level = settings.prefs.verbosity

    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format='%(levelname).1s %(asctime)s %(filename)-16s | %(message)s',
        datefmt="%H:%M:%S")

    from gitlanes.commitsource import CommitSourceError, getLog
    from gitlanes.graph import GraphDiagram

    limit = args.limit or settings.prefs.pageSize
    allRefs = False if args.head_only else None

    try:
        commits = getLog(args.repo, limit, args.skip, allRefs=allRefs)
    except CommitSourceError as exc:
        logging.getLogger(__name__).error(str(exc))
        return 1

    if commits:
        print(GraphDiagram.diagram(commits, labeler=describeCommit))
    return 0


if __name__ == "__main__":
    sys.exit(main())
