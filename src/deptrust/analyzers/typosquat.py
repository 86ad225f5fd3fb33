"""Typosquat detection against a reference list of popular package names."""

import logging
from collections.abc import Iterable

from deptrust.analyzers.popular_packages import POPULAR_PACKAGES
from deptrust.analyzers.typosquat_registry import fetch_popular_packages
from deptrust.manifests import normalize_pypi_name
from deptrust.models.schemas import Ecosystem, TyposquatResult

logger = logging.getLogger(__name__)

# Edit distances that flag a name on their own
MAX_EDIT_DISTANCE = 2

# Appended to (or stripped from) a popular name
DEFAULT_SUFFIXES = ("-js", "-node", "-lib", "-pkg", "-core", "js", "-new")

# Popular-name character -> lookalikes an attacker may substitute
HOMOGLYPHS = {
    "l": ("1", "i", "|"),
    "o": ("0",),
    "0": ("o",),
    "1": ("l", "i"),
    "i": ("1", "l"),
    "e": ("3",),
    "s": ("5",),
    "a": ("4", "@"),
    "g": ("9",),
    "b": ("6",),
}


class TyposquatDetector:
    """Flags names that look like a typo of a popular package.

    A name is compared against every reference name by Levenshtein distance
    (1 or 2 is a match) and by structural patterns that edit distance alone
    misses or only borderline catches: an added or removed suffix, a doubled
    letter, a missing letter, two swapped adjacent letters and a single
    homoglyph substitution.
    """

    def __init__(
        self,
        extra: Iterable[str] | None = None,
        ecosystem: Ecosystem = Ecosystem.NPM,
        suffixes: Iterable[str] = DEFAULT_SUFFIXES,
        reference: Iterable[str] | None = None,
    ) -> None:
        """Initialize the detector.

        Args:
            extra: Names added to the reference list.
            ecosystem: Selects the built-in reference list.
            suffixes: Suffixes for the added/removed-suffix pattern.
            reference: Replaces the built-in list entirely.
        """
        self.ecosystem = Ecosystem(ecosystem)
        base = reference if reference is not None else POPULAR_PACKAGES[self.ecosystem.value]
        names = [self.normalize(name) for name in [*base, *(extra or [])]]
        self.reference = list(dict.fromkeys(names))
        self._reference_set = frozenset(self.reference)
        self.suffixes = tuple(suffixes)

    @classmethod
    async def create_with_registry(cls, fetch_popular: bool = True, **kwargs) -> "TyposquatDetector":
        """Build an npm detector enriched with names from the npm search API.

        Falls back to the built-in list when nothing could be fetched.
        """
        if not fetch_popular:
            return cls()
        return cls(extra=await fetch_popular_packages(**kwargs))

    def __len__(self) -> int:
        return len(self.reference)

    def normalize(self, package_name: str) -> str:
        """Canonical form of a name. PyPI names compare case- and separator-insensitively."""
        if self.ecosystem == Ecosystem.PYPI:
            return normalize_pypi_name(package_name)
        return package_name

    def check(self, package_name: str) -> TyposquatResult:
        """Check whether ``package_name`` looks like a typosquat.

        Args:
            package_name: Candidate package name.

        Returns:
            TyposquatResult with sorted similar names. A name that is itself
            in the reference list is never risky.
        """
        package_name = self.normalize(package_name)
        if package_name in self._reference_set:
            return TyposquatResult(is_risky=False, similar_names=[], min_distance=0)

        similar: dict[str, int] = {}
        for popular in self.reference:
            # Edit distance is at least the length difference
            if abs(len(popular) - len(package_name)) > MAX_EDIT_DISTANCE:
                continue
            distance = levenshtein(package_name, popular)
            if 1 <= distance <= MAX_EDIT_DISTANCE:
                similar[popular] = distance

        for popular in self.pattern_matches(package_name):
            if popular not in similar:
                similar[popular] = levenshtein(package_name, popular)

        if not similar:
            return TyposquatResult(is_risky=False, similar_names=[], min_distance=0)

        logger.debug(f"{package_name} resembles {len(similar)} popular package(s)")
        return TyposquatResult(
            is_risky=True,
            similar_names=sorted(similar),
            min_distance=min(similar.values()),
        )

    def pattern_matches(self, package_name: str) -> list[str]:
        """Reference names matched by a structural typosquat pattern."""
        matches = []
        for popular in self.reference:
            if package_name == popular:
                continue

            if any(package_name == popular + s or package_name + s == popular for s in self.suffixes):
                matches.append(popular)

            if (
                is_doubled_letter(package_name, popular)
                or is_missing_letter(package_name, popular)
                or is_transposed(package_name, popular)
                or is_homoglyph(package_name, popular)
            ):
                matches.append(popular)

        return list(dict.fromkeys(matches))


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings in O(min(len(a), len(b))) space."""
    if len(a) > len(b):
        a, b = b, a
    if not a:
        return len(b)

    previous = list(range(len(a) + 1))
    for j, char_b in enumerate(b, start=1):
        current = [j] + [0] * len(a)
        for i, char_a in enumerate(a, start=1):
            cost = 0 if char_a == char_b else 1
            current[i] = min(
                previous[i] + 1,  # deletion
                current[i - 1] + 1,  # insertion
                previous[i - 1] + cost,  # substitution
            )
        previous = current
    return previous[-1]


def is_doubled_letter(candidate: str, target: str) -> bool:
    """``candidate`` is ``target`` with one letter doubled ("expresss")."""
    if len(candidate) != len(target) + 1:
        return False

    skipped = False
    j = 0
    for i, char in enumerate(candidate):
        if j >= len(target):
            # Extra trailing char must repeat the previous one
            return not skipped and i > 0 and char == candidate[i - 1]
        if char == target[j]:
            j += 1
        elif not skipped and i > 0 and char == candidate[i - 1]:
            skipped = True
        else:
            return False
    return j == len(target)


def is_missing_letter(candidate: str, target: str) -> bool:
    """``candidate`` is ``target`` with one letter removed ("expres")."""
    if len(candidate) != len(target) - 1:
        return False

    skipped = False
    j = 0
    for char in target:
        if j >= len(candidate):
            return not skipped
        if candidate[j] == char:
            j += 1
        elif not skipped:
            skipped = True
        else:
            return False
    return j == len(candidate)


def is_transposed(candidate: str, target: str) -> bool:
    """``candidate`` is ``target`` with two adjacent letters swapped ("exrpess")."""
    if len(candidate) != len(target):
        return False

    diffs = [i for i, (c, t) in enumerate(zip(candidate, target)) if c != t]
    if len(diffs) != 2:
        return False
    first, second = diffs
    return (
        second == first + 1
        and candidate[first] == target[second]
        and candidate[second] == target[first]
    )


def is_homoglyph(candidate: str, target: str) -> bool:
    """``candidate`` is ``target`` with exactly one lookalike substitution ("1odash")."""
    if len(candidate) != len(target):
        return False

    substitutions = 0
    for c, t in zip(candidate, target):
        if c == t:
            continue
        if c not in HOMOGLYPHS.get(t, ()):
            return False
        substitutions += 1
        if substitutions > 1:
            return False
    return substitutions == 1
