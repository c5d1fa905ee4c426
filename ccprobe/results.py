#!/usr/bin/env python3
"""
Result model: which languages accepted each catalogue descriptor.
"""

from typing import Iterable

from ccprobe.catalogue import Catalogue, Descriptor, Language, applies_to


class ProbeResults:
    """
    Outcome table keyed by descriptor.

    Each descriptor is recorded exactly once. The stored languages keep the
    catalogue's language order and never include a language the descriptor
    is not scoped to.
    """

    def __init__(self, catalogue: Catalogue):
        self.catalogue = catalogue
        self._outcomes: dict[Descriptor, tuple[Language, ...]] = {}

    def record(self, descriptor: Descriptor, languages: Iterable[Language]) -> None:
        if descriptor not in self.catalogue.descriptors:
            raise KeyError(f"{descriptor!r} is not in the catalogue")
        if descriptor in self._outcomes:
            raise ValueError(f"Outcome for {descriptor!r} already recorded")
        accepted = set(languages)
        stray = [lang for lang in accepted if not applies_to(descriptor, lang)]
        if stray:
            labels = ", ".join(lang.label for lang in stray)
            raise ValueError(f"{descriptor!r} cannot succeed for {labels}")
        self._outcomes[descriptor] = tuple(
            language for language in self.catalogue.languages if language in accepted
        )

    def outcome(self, descriptor: Descriptor) -> tuple[Language, ...]:
        """Languages that accepted ``descriptor``; KeyError if never probed."""
        return self._outcomes[descriptor]

    def succeeded(self, descriptor: Descriptor, language: Language) -> bool:
        return language in self.outcome(descriptor)

    def missing(self) -> list[Descriptor]:
        """Catalogue descriptors without an outcome, in catalogue order."""
        return [d for d in self.catalogue.descriptors if d not in self._outcomes]

    @property
    def complete(self) -> bool:
        return not self.missing()

    def require_complete(self) -> None:
        """Raise ValueError naming the first descriptors that were never probed."""
        missing = self.missing()
        if missing:
            names = ", ".join(repr(d) for d in missing[:3])
            raise ValueError(f"{len(missing)} descriptor(s) without outcome: {names}")
