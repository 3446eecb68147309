"""
Exercise taxonomy resolver.

Part of RQ-102: Muscle group reward buckets

Maps an exercise name to its catalog entry (primary muscle group + set
kind). Lookup is by exact, case-sensitive name; the first entry wins when a
name appears twice. Unknown names are still logged by the session but earn
no rewards.
"""
import logging
import pathlib
from functools import lru_cache
from typing import Any, Dict, Iterable, Iterator, List, Optional

import yaml

from domain.models import ExerciseCatalogEntry, MuscleGroup, SetKind

logger = logging.getLogger(__name__)

ROOT = pathlib.Path(__file__).resolve().parents[2]

DEFAULT_CATALOG_PATH = ROOT / "shared/dictionaries/exercise_catalog.yaml"


class ExerciseCatalog:
    """
    Immutable exercise catalog keyed by exercise name.

    Usage:
        >>> catalog = ExerciseCatalog.from_yaml(DEFAULT_CATALOG_PATH)
        >>> catalog.resolve("Bench Press").muscle_group
        <MuscleGroup.CHEST: 'chest'>
        >>> catalog.resolve("bench press") is None
        True
    """

    def __init__(self, entries: Iterable[ExerciseCatalogEntry]):
        self._entries: List[ExerciseCatalogEntry] = []
        self._by_name: Dict[str, ExerciseCatalogEntry] = {}
        for entry in entries:
            self._entries.append(entry)
            if entry.name in self._by_name:
                logger.debug("Duplicate catalog entry '%s' ignored", entry.name)
                continue
            self._by_name[entry.name] = entry

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "ExerciseCatalog":
        """
        Build a catalog from a categorized document.

        Expected shape::

            categories:
              - name: Chest
                exercises:
                  - {name: Bench Press, muscle: Chest, equipment: Barbell, type: standard}

        Raises:
            ValueError: If a category name is not one of the seven muscle groups
        """
        entries: List[ExerciseCatalogEntry] = []
        for category in document.get("categories") or []:
            group = MuscleGroup.from_label(category.get("name"))
            if group is None:
                raise ValueError(f"Unknown catalog category '{category.get('name')}'")
            for exercise in category.get("exercises") or []:
                entries.append(
                    ExerciseCatalogEntry(
                        name=exercise["name"],
                        muscle_group=group,
                        set_kind=exercise.get("type", SetKind.STANDARD.value),
                        muscle=exercise.get("muscle"),
                        equipment=exercise.get("equipment"),
                    )
                )
        return cls(entries)

    @classmethod
    def from_yaml(cls, path: pathlib.Path) -> "ExerciseCatalog":
        document = yaml.safe_load(pathlib.Path(path).read_text()) or {}
        catalog = cls.from_document(document)
        logger.info("Loaded %d exercises from %s", len(catalog), path)
        return catalog

    def __len__(self) -> int:
        return len(self._by_name)

    def __iter__(self) -> Iterator[ExerciseCatalogEntry]:
        return iter(self._by_name.values())

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def resolve(self, exercise_name: str) -> Optional[ExerciseCatalogEntry]:
        """
        Resolve an exercise name to its catalog entry.

        Returns:
            The entry, or None when the name is not in the catalog
        """
        return self._by_name.get(exercise_name)

    def categories(self) -> List[MuscleGroup]:
        """Muscle groups that have at least one exercise, in catalog order."""
        seen: List[MuscleGroup] = []
        for entry in self._entries:
            if entry.muscle_group not in seen:
                seen.append(entry.muscle_group)
        return seen

    def search(
        self,
        term: str = "",
        category: Optional[MuscleGroup] = None,
    ) -> List[ExerciseCatalogEntry]:
        """
        Case-insensitive search over name, muscle description and equipment.

        Args:
            term: Substring to look for (empty matches everything)
            category: Restrict results to one muscle group

        Returns:
            Matching entries in catalog order
        """
        needle = term.strip().lower()
        results = []
        for entry in self:
            if category is not None and entry.muscle_group != category:
                continue
            haystack = " ".join(
                part for part in (entry.name, entry.muscle, entry.equipment) if part
            ).lower()
            if needle in haystack:
                results.append(entry)
        return results


@lru_cache
def load_default_catalog() -> ExerciseCatalog:
    """Load the bundled catalog once per process."""
    return ExerciseCatalog.from_yaml(DEFAULT_CATALOG_PATH)
