from typing import Iterable, List, Optional

MAX_TAGS = 5


class TagSet:
    """Tags typed into the create-service form: trimmed, unique, capped, in entry order."""

    def __init__(self, tags: Optional[Iterable[str]] = None, limit: int = MAX_TAGS):
        self.limit = limit
        self._tags: List[str] = []
        for tag in tags or ():
            self.add(tag)

    def add(self, tag: str) -> bool:
        """Add a tag. Returns False when it is blank, a duplicate, or the set is full."""
        tag = (tag or "").strip()
        if not tag or tag in self._tags or len(self._tags) >= self.limit:
            return False
        self._tags.append(tag)
        return True

    def remove(self, tag: str) -> None:
        self._tags = [t for t in self._tags if t != tag]

    def as_list(self) -> List[str]:
        return list(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self):
        return iter(list(self._tags))

    def __contains__(self, tag: str) -> bool:
        return tag in self._tags


def normalize_tags(tags: Optional[Iterable[str]]) -> List[str]:
    return TagSet(tags).as_list()
