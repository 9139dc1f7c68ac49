"""Unit tests for Pydantic schemas."""

import pytest
from datetime import date
from pydantic import ValidationError

from kennel.schemas.dog import DogCreate, Sex
from kennel.schemas.litter import LITTER_TRANSITIONS, LitterStatus, MatingDetails, can_transition
from kennel.schemas.pedigree import PedigreeDog
from kennel.schemas.puppy import PuppyInput, PuppyStatus, default_identifier


class TestDogSchemas:
    """Test dog validation."""

    def test_valid_dog(self):
        dog = DogCreate(name="Bella", sex="female", birth_date="2019-05-10")

        assert dog.sex == Sex.FEMALE
        assert dog.birth_date == date(2019, 5, 10)
        assert dog.titles == []

    def test_empty_name_is_rejected(self):
        with pytest.raises(ValidationError):
            DogCreate(name="", sex="male", birth_date="2019-05-10")

    def test_unknown_sex_is_rejected(self):
        with pytest.raises(ValidationError):
            DogCreate(name="Rex", sex="other", birth_date="2019-05-10")


class TestPuppySchemas:
    """Test puppy input validation."""

    def test_defaults(self):
        puppy = PuppyInput(sex="male")

        assert puppy.status == PuppyStatus.AVAILABLE
        assert puppy.identifier is None
        assert puppy.is_alive

    def test_deceased_puppy_is_not_alive(self):
        assert not PuppyInput(sex="female", status="deceased").is_alive

    @pytest.mark.parametrize("weight", [0, -1])
    def test_non_positive_weight_is_rejected(self, weight):
        with pytest.raises(ValidationError):
            PuppyInput(sex="male", birth_weight=weight)

    @pytest.mark.parametrize("sex,order,expected", [
        (Sex.MALE, 1, "M-1"),
        (Sex.FEMALE, 2, "F-2"),
        ("male", 12, "M-12"),
    ])
    def test_default_identifier(self, sex, order, expected):
        assert default_identifier(sex, order) == expected


class TestLitterSchemas:
    """Test the litter state machine and command inputs."""

    def test_every_status_has_transitions(self):
        assert set(LITTER_TRANSITIONS) == set(LitterStatus)

    @pytest.mark.parametrize("current,target,allowed", [
        (LitterStatus.PLANNED, LitterStatus.CONFIRMED, True),
        (LitterStatus.CONFIRMED, LitterStatus.BORN, True),
        (LitterStatus.PREGNANT, LitterStatus.BORN, True),
        (LitterStatus.BORN, LitterStatus.WEANED, True),
        (LitterStatus.WEANED, LitterStatus.CLOSED, True),
        (LitterStatus.BORN, LitterStatus.PREGNANT, False),
        (LitterStatus.CLOSED, LitterStatus.BORN, False),
        (LitterStatus.CANCELLED, LitterStatus.CONFIRMED, False),
    ])
    def test_transitions(self, current, target, allowed):
        assert can_transition(current, target) is allowed

    def test_terminal_statuses_have_no_moves(self):
        assert LITTER_TRANSITIONS[LitterStatus.CLOSED] == frozenset()
        assert LITTER_TRANSITIONS[LitterStatus.CANCELLED] == frozenset()

    def test_litter_letter_is_one_character(self):
        with pytest.raises(ValidationError):
            MatingDetails(litter_letter="AB")


class TestPedigreeSchemas:
    """Test pedigree node data."""

    def test_unknown_placeholder(self):
        node = PedigreeDog.unknown(Sex.FEMALE, "Unknown")

        assert node.id is None
        assert node.name is None
        assert node.display_name == "Unknown"
        assert node.sex == Sex.FEMALE
        assert node.is_unknown is True
        assert node.titles == []
