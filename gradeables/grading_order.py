"""Order in which a grader walks through the submitters of a gradeable.

Submitters are grouped by grading section (in the order the section
resolver returns them) and sorted by id within each section. The
sections are then treated as one flattened sequence for prev/next
navigation, which skips anyone without an active submission.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Iterator

from .collaborators import SectionResolver, VersionLookup

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Submitter:
    """A student, or a team for team assignments."""

    id: str
    team: bool = False


@dataclass
class GradingSection:
    name: str
    submitters: list[Any] = field(default_factory=list)
    graders: list[Any] = field(default_factory=list)


class GradingOrder:
    def __init__(
        self,
        gradeable,
        user,
        sections: SectionResolver,
        versions: VersionLookup,
        all_sections: bool = False,
    ):
        self.gradeable = gradeable
        self.user = user
        self.all_sections = all_sections

        if all_sections:
            self._sections = list(sections.get_all_grading_sections(gradeable))
        else:
            self._sections = list(sections.get_grading_sections_for_user(gradeable, user))

        user_ids: list[str] = []
        team_ids: list[str] = []
        self._section_submitters: dict[str, list[Any]] = {}
        for section in self._sections:
            submitters = list(section.submitters)
            self._section_submitters[section.name] = submitters
            if gradeable.team_assignment:
                team_ids.extend(s.id for s in submitters)
            else:
                user_ids.extend(s.id for s in submitters)

        active = versions.get_active_versions(gradeable, user_ids + team_ids)
        self._has_submission = {submitter_id: version > 0 for submitter_id, version in active.items()}

        self._sort()

        self._order: list[Any] = [s for submitters in self._section_submitters.values() for s in submitters]
        self._index: dict[str, int] = {}
        for i, submitter in enumerate(self._order):
            if submitter.id in self._index:
                logger.warning("Submitter %s appears in more than one grading section of %s", submitter.id, gradeable.id)
                continue
            self._index[submitter.id] = i

        logger.debug(
            "Grading order for %s: %d sections, %d submitters",
            gradeable.id, len(self._sections), len(self._order),
        )

    def _sort(self) -> None:
        for name, submitters in self._section_submitters.items():
            self._section_submitters[name] = sorted(submitters, key=attrgetter("id"))

    def __iter__(self) -> Iterator[Any]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._order)

    def get_prev_submitter(self, submitter):
        """Previous submitter that has something to grade, or None."""
        return self._step(submitter, -1)

    def get_next_submitter(self, submitter):
        """Next submitter that has something to grade, or None."""
        return self._step(submitter, 1)

    def _step(self, submitter, direction: int):
        index = self._index.get(submitter.id)
        if index is None:
            return None

        index += direction
        while 0 <= index < len(self._order):
            candidate = self._order[index]
            if self.has_submission(candidate):
                return candidate
            index += direction
        return None

    def has_submission(self, submitter) -> bool:
        return self._has_submission.get(submitter.id, False)

    def contains_submitter(self, submitter) -> bool:
        return submitter.id in self._index

    @property
    def section_submitters(self) -> dict[str, tuple]:
        return {name: tuple(submitters) for name, submitters in self._section_submitters.items()}

    @property
    def section_graders(self) -> dict[str, tuple]:
        return {section.name: tuple(section.graders) for section in self._sections}

    @property
    def section_names(self) -> list[str]:
        return [section.name for section in self._sections]

    @property
    def section_key(self) -> str:
        """Which section assignment groups the submitters."""
        return "registration" if self.gradeable.grade_by_registration else "rotating"
