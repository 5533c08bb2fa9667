"""Sensor sources: ordered candidate lists resolved against the filesystem or host probes."""

from __future__ import annotations

import glob
import re
from typing import Any, Callable

from .parsers import SensorUnavailable

RawValue = Any

_DIGITS_RE = re.compile(r"(\d+)")


def _natural_key(path: str) -> list[Any]:
    return [int(part) if part.isdigit() else part for part in _DIGITS_RE.split(path)]


class TickReader:
    """Memoizes file reads for a single collection tick."""

    def __init__(self) -> None:
        self._texts: dict[str, str | SensorUnavailable] = {}
        self._globs: dict[str, list[str]] = {}

    def expand(self, pattern: str) -> list[str]:
        if pattern not in self._globs:
            if any(ch in pattern for ch in "*?["):
                self._globs[pattern] = sorted(glob.glob(pattern), key=_natural_key)
            else:
                self._globs[pattern] = [pattern]
        return self._globs[pattern]

    def read_text(self, path: str) -> str:
        cached = self._texts.get(path)
        if cached is None:
            try:
                with open(path, "r", encoding="utf-8", errors="ignore") as f:
                    cached = f.read()
            except OSError as exc:
                cached = SensorUnavailable(f"{path}: {exc.strerror or exc}")
            self._texts[path] = cached
        if isinstance(cached, SensorUnavailable):
            raise cached
        return cached


class Candidate:
    name: str = ""

    def read(self, reader: TickReader) -> RawValue:
        raise NotImplementedError


class FileCandidate(Candidate):
    def __init__(self, pattern: str, parse: Callable[[str], RawValue]) -> None:
        self.name = pattern
        self.pattern = pattern
        self._parse = parse

    def read(self, reader: TickReader) -> RawValue:
        last: SensorUnavailable | None = None
        for path in reader.expand(self.pattern):
            try:
                return self._parse(reader.read_text(path))
            except SensorUnavailable as exc:
                last = exc
        raise last or SensorUnavailable(f"no match for {self.pattern}")


class ProbeCandidate(Candidate):
    def __init__(self, name: str, probe: Callable[[], RawValue]) -> None:
        self.name = name
        self._probe = probe

    def read(self, reader: TickReader) -> RawValue:
        return self._probe()


class SensorSource:
    """Reads one metric from the first candidate that answers."""

    def __init__(self, key: str, candidates: list[Candidate]) -> None:
        self.key = key
        self.candidates = list(candidates)
        self.active: str | None = None
        self.last_error: str | None = None

    def read(self, reader: TickReader | None = None) -> RawValue | None:
        reader = reader or TickReader()
        errors: list[str] = []
        for candidate in self.candidates:
            try:
                value = candidate.read(reader)
            except SensorUnavailable as exc:
                errors.append(str(exc))
                continue
            self.active = candidate.name
            self.last_error = None
            return value
        self.active = None
        self.last_error = "; ".join(errors) or "no candidates"
        return None

    def __repr__(self) -> str:
        return f"SensorSource({self.key!r}, candidates={[c.name for c in self.candidates]!r})"
