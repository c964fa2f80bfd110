"""Semantic versions and version requirements for package dependencies.

Requirement syntax and matching follow Cargo's ``semver::VersionReq``:
exact (``=`` or ``==``), ranges (``>=``, ``<=``, ``>``, ``<``), caret
(``^``), tilde (``~``), wildcards (``*``, ``x``, ``1.*``, ``1.2.x``) and
comma-separated conjunctions. A bare requirement such as ``1.2`` is read as
a caret requirement. Minor and patch may be omitted (``>=1.0``, ``^1``).
Not-equal (``!=``) is also accepted and negates the exact match.

Versions are ordered by SemVer 2.0.0 precedence (section 11): a pre-release
sorts below its release, and build metadata is ignored. A pre-release
version only satisfies a requirement when some atom of that requirement
names its full ``major.minor.patch``: ``<1.0.0`` admits ``1.0.0-alpha``
and ``>=1.0.0-beta`` admits ``1.0.0-rc.1``, but ``>=1.0.0`` does not pull in
``2.0.0-alpha``.

References
----------
.. [SemVer] Preston-Werner, T. (2013). "Semantic Versioning 2.0.0."
   https://semver.org/
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import NamedTuple, Union

_SEMVER_RE = re.compile(
    r"^(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<pre>[0-9A-Za-z\-.]+))?"
    r"(?:\+(?P<build>[0-9A-Za-z\-.]+))?$"
)

_CONSTRAINT_ATOM_RE = re.compile(
    r"^\s*(?P<op>==|=|!=|>=|<=|>|<|\^|~)?\s*"
    r"(?P<major>0|[1-9]\d*|[*xX])"
    r"(?:\.(?P<minor>0|[1-9]\d*|[*xX]))?"
    r"(?:\.(?P<patch>0|[1-9]\d*|[*xX]))?"
    r"(?:-(?P<pre>[0-9A-Za-z\-.]+))?"
    r"(?:\+[0-9A-Za-z\-.]+)?\s*$"
)

_WILDCARDS = frozenset("*xX")

Identifier = Union[int, str]


class Version(NamedTuple):
    """A parsed semantic version. Build metadata is dropped."""

    major: int
    minor: int
    patch: int
    pre: tuple[Identifier, ...] = ()


def _pre_key(pre: tuple[Identifier, ...]) -> tuple:
    # Release > any pre-release; numeric identifiers < alphanumeric ones;
    # a shorter identifier list sorts first when it is a prefix.
    if not pre:
        return (1,)
    return (0, tuple((0, i) if isinstance(i, int) else (1, i) for i in pre))


def _parse_pre(raw: str | None, source: str) -> tuple[Identifier, ...]:
    if not raw:
        return ()
    identifiers: list[Identifier] = []
    for part in raw.split("."):
        if not part:
            raise ValueError(f"Empty pre-release identifier in {source!r}")
        if part.isdigit():
            if len(part) > 1 and part[0] == "0":
                raise ValueError(f"Leading zero in pre-release of {source!r}")
            identifiers.append(int(part))
        else:
            identifiers.append(part)
    return tuple(identifiers)


def parse_version(version: str) -> Version:
    """Parse a semantic version string.

    Raises:
        ValueError: If the string is not a semantic version.
    """
    m = _SEMVER_RE.match(version.strip())
    if not m:
        raise ValueError(f"Invalid semantic version: {version!r}")
    return Version(
        int(m.group("major")),
        int(m.group("minor")),
        int(m.group("patch")),
        _parse_pre(m.group("pre"), version),
    )


@dataclass(frozen=True)
class _Comparator:
    """One parsed atom. ``minor``/``patch`` are None when omitted."""

    op: str
    major: int | None
    minor: int | None
    patch: int | None
    pre: tuple[Identifier, ...]

    def matches(self, ver: Version) -> bool:
        if self.major is None:
            return True
        if self.op in ("=", "==", "*"):
            return self._exact(ver)
        if self.op == "!=":
            return not self._exact(ver)
        if self.op == ">":
            return self._greater(ver)
        if self.op == ">=":
            return self._exact(ver) or self._greater(ver)
        if self.op == "<":
            return self._less(ver)
        if self.op == "<=":
            return self._exact(ver) or self._less(ver)
        if self.op == "~":
            return self._tilde(ver)
        return self._caret(ver)

    def allows_prerelease_of(self, ver: Version) -> bool:
        return (self.major, self.minor, self.patch) == (
            ver.major,
            ver.minor,
            ver.patch,
        )

    def _exact(self, ver: Version) -> bool:
        if ver.major != self.major:
            return False
        if self.minor is None:
            return True
        if ver.minor != self.minor:
            return False
        if self.patch is None:
            return True
        return ver.patch == self.patch and ver.pre == self.pre

    def _greater(self, ver: Version) -> bool:
        if ver.major != self.major:
            return ver.major > self.major
        if self.minor is None:
            return False
        if ver.minor != self.minor:
            return ver.minor > self.minor
        if self.patch is None:
            return False
        if ver.patch != self.patch:
            return ver.patch > self.patch
        return _pre_key(ver.pre) > _pre_key(self.pre)

    def _less(self, ver: Version) -> bool:
        if ver.major != self.major:
            return ver.major < self.major
        if self.minor is None:
            return False
        if ver.minor != self.minor:
            return ver.minor < self.minor
        if self.patch is None:
            return False
        if ver.patch != self.patch:
            return ver.patch < self.patch
        return _pre_key(ver.pre) < _pre_key(self.pre)

    def _tilde(self, ver: Version) -> bool:
        # ~1.2.3 := >=1.2.3,<1.3.0   ~1.2 := >=1.2.0,<1.3.0   ~1 := >=1.0.0,<2.0.0
        if ver.major != self.major:
            return False
        if self.minor is not None and ver.minor != self.minor:
            return False
        if self.patch is not None and ver.patch != self.patch:
            return ver.patch > self.patch
        return _pre_key(ver.pre) >= _pre_key(self.pre)

    def _caret(self, ver: Version) -> bool:
        # ^1.2.3 := >=1.2.3,<2.0.0   ^0.2.3 := >=0.2.3,<0.3.0   ^0.0.3 := =0.0.3
        if ver.major != self.major:
            return False
        if self.minor is None:
            return True
        if self.patch is None:
            if self.major > 0:
                return ver.minor >= self.minor
            return ver.minor == self.minor
        if self.major > 0:
            if ver.minor != self.minor:
                return ver.minor > self.minor
            if ver.patch != self.patch:
                return ver.patch > self.patch
        elif self.minor > 0:
            if ver.minor != self.minor:
                return False
            if ver.patch != self.patch:
                return ver.patch > self.patch
        elif ver.minor != self.minor or ver.patch != self.patch:
            return False
        return _pre_key(ver.pre) >= _pre_key(self.pre)


def _parse_atom(atom: str) -> _Comparator:
    m = _CONSTRAINT_ATOM_RE.match(atom)
    if not m:
        raise ValueError(f"Invalid constraint atom: {atom!r}")

    op = m.group("op")
    parts = [m.group("major"), m.group("minor"), m.group("patch")]
    pre = m.group("pre")

    numbers: list[int | None] = []
    wildcard = False
    for part in parts:
        if part is None or part in _WILDCARDS:
            wildcard = wildcard or part is not None
            numbers.append(None)
        elif wildcard or None in numbers:
            raise ValueError(f"Invalid constraint atom: {atom!r}")
        else:
            numbers.append(int(part))

    if pre is not None and numbers[2] is None:
        raise ValueError(f"Pre-release requires a full version: {atom!r}")
    if wildcard:
        if op not in (None, "=", "=="):
            raise ValueError(f"Wildcard not allowed after {op!r}: {atom!r}")
        op = "*"

    major, minor, patch = numbers
    return _Comparator(
        op=op or "^",
        major=major,
        minor=minor,
        patch=patch,
        pre=_parse_pre(pre, atom),
    )


@dataclass(frozen=True)
class VersionConstraint:
    """A version requirement such as ``>=1.0.0,<2.0.0``.

    The requirement is validated on construction.

    Attributes:
        raw: The requirement as written.

    Raises:
        ValueError: If any comma-separated atom is malformed.
    """

    raw: str

    def __post_init__(self) -> None:
        self._comparators()

    def _comparators(self) -> list[_Comparator]:
        stripped = self.raw.strip()
        if stripped == "*":
            return []
        atoms = [a.strip() for a in stripped.split(",") if a.strip()]
        if not atoms:
            raise ValueError(f"Empty version constraint: {self.raw!r}")
        return [_parse_atom(atom) for atom in atoms]

    def satisfies(self, version: str) -> bool:
        """Return True if ``version`` meets every atom of the requirement.

        Raises:
            ValueError: If ``version`` is not a semantic version.
        """
        ver = parse_version(version)
        comparators = self._comparators()
        if not all(c.matches(ver) for c in comparators):
            return False
        if not ver.pre:
            return True
        return any(c.allows_prerelease_of(ver) for c in comparators)

    def __str__(self) -> str:
        return self.raw

    def __repr__(self) -> str:
        return f"VersionConstraint({self.raw!r})"
