"""Pedigree tree and flattened ancestor structures."""
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from kennel.schemas.dog import DogRead, Sex


class PedigreeDog(BaseModel):
    """Dog data shown in a pedigree node, or an unknown-ancestor placeholder."""
    id: Optional[int] = None
    name: Optional[str] = None
    display_name: str
    call_name: Optional[str] = None
    registration_number: Optional[str] = None
    breed: Optional[str] = None
    color: Optional[str] = None
    sex: Sex
    birth_date: Optional[date] = None
    photo_main_url: Optional[str] = None
    titles: List[str] = Field(default_factory=list)
    health_tests: List[dict] = Field(default_factory=list)
    sire_id: Optional[int] = None
    dam_id: Optional[int] = None
    is_unknown: bool = False

    @classmethod
    def from_dog(cls, dog: DogRead) -> "PedigreeDog":
        return cls(
            id=dog.id,
            name=dog.name,
            display_name=dog.name,
            call_name=dog.call_name,
            registration_number=dog.registration_number,
            breed=dog.breed,
            color=dog.color,
            sex=dog.sex,
            birth_date=dog.birth_date,
            photo_main_url=dog.photo_main_url,
            titles=list(dog.titles),
            health_tests=list(dog.health_tests),
            sire_id=dog.sire_id,
            dam_id=dog.dam_id,
        )

    @classmethod
    def unknown(cls, sex: Sex, label: str) -> "PedigreeDog":
        """Placeholder for a parent id that is recorded but does not resolve."""
        return cls(display_name=label, sex=sex, is_unknown=True)


class PedigreeTree(BaseModel):
    """Parents of one node; an absent key means no ancestor is recorded."""
    sire: Optional["PedigreeNode"] = None
    dam: Optional["PedigreeNode"] = None


class PedigreeNode(BaseModel):
    """One ancestor and the subtree of its own parents."""
    dog: PedigreeDog
    pedigree: PedigreeTree = Field(default_factory=PedigreeTree)


PedigreeTree.model_rebuild()


class PedigreeResult(BaseModel):
    """Pedigree of a dog bounded to a number of ancestor generations."""
    dog: PedigreeDog
    tree: PedigreeTree
    generations: int


class AncestorRecord(PedigreeDog):
    """Flattened ancestor with its position code (S/D path) and role label."""
    generation: int
    position: str
    role: str


class FlatPedigree(BaseModel):
    """Pedigree flattened into a map keyed by position code."""
    dog: PedigreeDog
    ancestors: Dict[str, AncestorRecord]
    generation_labels: Dict[int, str]
    generations: int
