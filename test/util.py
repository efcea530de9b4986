import pygit2

from gitlanes.graph import CommitRecord, GraphDiagram
from gitlanes.porcelain import *
from . import *

TEST_SIGNATURE = Signature("Test Person", "toto@example.com", 1672600000, 0)


def parseSequence(definition: str) -> list[CommitRecord]:
    sequence, _heads = GraphDiagram.parseDefinition(definition)
    return sequence


class RepoBuilder:
    """
    Builds a repository commit by commit, with strictly increasing timestamps
    so that chronological walks are reproducible.
    """

    def __init__(self, path: str):
        self.repo = pygit2.init_repository(path, initial_head="main")
        self.emptyTree = self.repo.TreeBuilder().write()
        self.clock = TEST_SIGNATURE.time
        self.ids: dict[str, Oid] = {}

    def commit(self, name: str, *parents: str, branch: str = "") -> Oid:
        self.clock += 60
        signature = Signature(TEST_SIGNATURE.name, TEST_SIGNATURE.email, self.clock, 0)
        parentIds = [self.ids[p] for p in parents]
        oid = self.repo.create_commit(None, signature, signature, f"{name}\n\nBody of {name}", self.emptyTree, parentIds)
        self.ids[name] = oid
        if branch:
            self.setBranch(branch, name)
        return oid

    def setBranch(self, branch: str, name: str):
        self.repo.references.create(f"refs/heads/{branch}", self.ids[name], force=True)

    def tag(self, tagName: str, name: str):
        self.repo.references.create(f"refs/tags/{tagName}", self.ids[name])

    def hexOf(self, name: str) -> str:
        return str(self.ids[name])

    def nameOf(self, hexHash: str) -> str:
        return next(name for name, oid in self.ids.items() if str(oid) == hexHash)
