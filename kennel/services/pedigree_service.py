"""Pedigree service resolving ancestors, offspring and siblings of a dog."""
import logging
from typing import Any, Callable, Dict, List, Optional

from kennel.exceptions import NotFoundError, ValidationError
from kennel.i18n import Translator
from kennel.repositories.base import EntityStore
from kennel.schemas.dog import DogRead, Sex
from kennel.schemas.pedigree import (
    AncestorRecord,
    FlatPedigree,
    PedigreeDog,
    PedigreeNode,
    PedigreeResult,
    PedigreeTree,
)


logger = logging.getLogger(__name__)

MAX_GENERATIONS = 5


def clamp_generations(generations: Any) -> int:
    """Clamp a requested generation count into [1, MAX_GENERATIONS]."""
    if isinstance(generations, bool) or not isinstance(generations, int):
        raise ValidationError({"generations": "Must be an integer"})
    return max(1, min(generations, MAX_GENERATIONS))


class PedigreeService:
    """
    Read-only service building pedigrees from the sire_id/dam_id links.

    Generations are numbered from the subject: its parents are generation 1.
    Recursion stops once the current generation reaches ``generations``, so
    a request for n generations resolves ancestors up to generation n - 1
    and ``generations=1`` yields an empty tree. A parent id that is not
    recorded leaves the node out; a recorded id that does not resolve for
    the tenant yields an unknown-ancestor placeholder.

    When set, ``on_action("pedigree_built", dog=..., pedigree=...)`` is
    called after every tree is built.
    """

    def __init__(
        self,
        store: EntityStore,
        translator: Optional[Translator] = None,
        default_generations: int = 3,
        on_action: Optional[Callable[..., None]] = None,
    ):
        self.store = store
        self.translator = translator or Translator()
        self.default_generations = clamp_generations(default_generations)
        self.on_action = on_action

    def get_pedigree(self, dog_id: int, generations: Optional[int] = None) -> PedigreeResult:
        """
        Build the ancestor tree of a dog.

        Args:
            dog_id: Subject dog
            generations: Depth bound, clamped to [1, 5] (default_generations
                when omitted)

        Returns:
            PedigreeResult with the subject, its tree and the clamped depth

        Raises:
            NotFoundError: If the dog does not exist
            ValidationError: If generations is not an integer
        """
        if generations is None:
            generations = self.default_generations
        generations = clamp_generations(generations)
        dog = self._require_dog(dog_id)
        tree = self._build_tree(dog, generations, generation=1)

        result = PedigreeResult(
            dog=PedigreeDog.from_dog(dog),
            tree=tree,
            generations=generations,
        )

        logger.debug(f"Built {generations}-generation pedigree for dog {dog_id}")
        if self.on_action is not None:
            self.on_action("pedigree_built", dog=dog, pedigree=result)
        return result

    def get_pedigree_flat(self, dog_id: int, generations: Optional[int] = None) -> FlatPedigree:
        """
        Pedigree flattened into a map keyed by position code.

        The code is the S/D path from the subject: "S" is the sire, "DS" the
        dam's sire. Every record carries its generation and a role label.
        """
        pedigree = self.get_pedigree(dog_id, generations)
        ancestors: Dict[str, AncestorRecord] = {}
        self._flatten(pedigree.tree, ancestors, generation=1, position="")

        return FlatPedigree(
            dog=pedigree.dog,
            ancestors=ancestors,
            generation_labels=self.translator.generation_labels(MAX_GENERATIONS),
            generations=pedigree.generations,
        )

    def get_offspring(self, dog_id: int) -> List[DogRead]:
        """Children of a dog, newest birth_date first."""
        dog = self._require_dog(dog_id)
        field = "sire_id" if dog.sex == Sex.MALE else "dam_id"
        return self.store.find_dogs_by_filter({field: dog_id})

    def get_siblings(self, dog_id: int, full_siblings: bool = True) -> List[DogRead]:
        """
        Siblings of a dog, excluding the dog itself.

        Full siblings share both sire and dam. Otherwise any dog sharing the
        sire or the dam is returned, each once.
        """
        dog = self._require_dog(dog_id)
        siblings: Dict[int, DogRead] = {}

        if dog.sire_id is not None:
            for child in self.store.find_dogs_by_filter({"sire_id": dog.sire_id}):
                if child.id == dog_id:
                    continue
                if full_siblings and (dog.dam_id is None or child.dam_id != dog.dam_id):
                    continue
                siblings[child.id] = child

        if not full_siblings and dog.dam_id is not None:
            for child in self.store.find_dogs_by_filter({"dam_id": dog.dam_id}):
                if child.id != dog_id:
                    siblings.setdefault(child.id, child)

        return list(siblings.values())

    def _build_tree(self, dog: DogRead, generations: int, generation: int) -> PedigreeTree:
        # generation is the one the parents of dog belong to
        if generation >= generations:
            return PedigreeTree()
        return PedigreeTree(
            sire=self._resolve_parent(dog.sire_id, Sex.MALE, generations, generation),
            dam=self._resolve_parent(dog.dam_id, Sex.FEMALE, generations, generation),
        )

    def _resolve_parent(
        self,
        parent_id: Optional[int],
        sex: Sex,
        generations: int,
        generation: int,
    ) -> Optional[PedigreeNode]:
        if parent_id is None:
            return None

        parent = self.store.find_dog(parent_id)
        if parent is None:
            logger.debug(f"Parent {parent_id} not found, using unknown placeholder")
            return PedigreeNode(
                dog=PedigreeDog.unknown(sex, self.translator.gettext("unknown_ancestor"))
            )

        return PedigreeNode(
            dog=PedigreeDog.from_dog(parent),
            pedigree=self._build_tree(parent, generations, generation + 1),
        )

    def _flatten(
        self,
        tree: PedigreeTree,
        ancestors: Dict[str, AncestorRecord],
        generation: int,
        position: str,
    ) -> None:
        for code, node, sex in (("S", tree.sire, Sex.MALE), ("D", tree.dam, Sex.FEMALE)):
            if node is None:
                continue
            node_position = position + code
            ancestors[node_position] = AncestorRecord(
                **node.dog.model_dump(),
                generation=generation,
                position=node_position,
                role=self.translator.ancestor_role(generation, sex.value),
            )
            self._flatten(node.pedigree, ancestors, generation + 1, node_position)

    def _require_dog(self, dog_id: int) -> DogRead:
        dog = self.store.find_dog(dog_id)
        if dog is None:
            raise NotFoundError("dog", dog_id)
        return dog
