"""Tests for generation resolution."""

import pytest

from conftest import person
from generations import find_roots, resolve
from models import FamilyUnion


class TestRoots:
    def test_spouses_and_children_are_not_roots(self, three_generations):
        people, unions = three_generations
        assert [p.handle for p in find_roots(people, unions)] == ["A"]

    def test_roots_keep_input_order(self):
        people = [person("Z"), person("M", lineage=False), person("A")]
        assert [p.handle for p in find_roots(people, [])] == ["Z", "A"]


class TestResolve:
    def test_founder_spouse_and_child(self):
        """Founder and spouse share generation 0, their child is generation 1."""
        people = [
            person("A", families=["U"]),
            person("B", lineage=False, families=["U"]),
            person("C", parent_families=["U"]),
        ]
        unions = [FamilyUnion("U", father_handle="A", mother_handle="B", children=["C"])]

        assert dict(resolve(people, unions)) == {"A": 0, "B": 0, "C": 1}

    def test_three_generations(self, three_generations):
        people, unions = three_generations
        assert dict(resolve(people, unions)) == {"A": 0, "B": 0, "C": 1, "D": 1, "E": 1, "G": 2}

    def test_every_person_gets_exactly_one_generation(self, three_generations):
        people, unions = three_generations
        people = people + [person("LONER"), person("OUTSIDER", lineage=False)]

        generations = resolve(people, unions)

        assert set(generations) == {p.handle for p in people}

    def test_children_are_one_below_the_father(self):
        people = [
            person("R", families=["U1"]),
            person("S", families=["U2"], parent_families=["U1"]),
            person("K1", parent_families=["U2"]),
            person("K2", parent_families=["U2"]),
        ]
        unions = [
            FamilyUnion("U1", father_handle="R", children=["S"]),
            FamilyUnion("U2", father_handle="S", children=["K1", "K2"]),
        ]

        generations = resolve(people, unions)

        assert generations["K1"] == generations["K2"] == generations["S"] + 1 == 2

    @pytest.mark.parametrize(
        "hint, expected",
        [(None, 0), (3, 2), (5, 4), (1, 0), (0, 0)],
    )
    def test_unreached_people_fall_back_to_hint(self, hint, expected):
        people = [person("ROOT"), person("X", lineage=False, generation=hint)]
        assert resolve(people, [])["X"] == expected

    def test_hint_ignored_when_reached(self):
        people = [person("A", families=["U"]), person("C", parent_families=["U"], generation=7)]
        unions = [FamilyUnion("U", father_handle="A", children=["C"])]

        assert resolve(people, unions)["C"] == 1

    def test_first_assignment_wins(self):
        """
        K is R1's child (generation 1) and also R2's wife (generation 0).
        Whichever root comes first in the input decides.
        """
        r1 = person("R1", families=["U1"])
        r2 = person("R2", families=["U2"])
        k = person("K", families=["U2"], parent_families=["U1"])
        unions = [
            FamilyUnion("U1", father_handle="R1", children=["K"]),
            FamilyUnion("U2", father_handle="R2", mother_handle="K"),
        ]

        assert resolve([r1, r2, k], unions)["K"] == 1
        assert resolve([r2, r1, k], unions)["K"] == 0

    def test_cycle_terminates(self):
        people = [
            person("R", families=["U0"]),
            person("A", families=["U1"], parent_families=["U0", "U2"]),
            person("B", families=["U2"], parent_families=["U1"]),
        ]
        unions = [
            FamilyUnion("U0", father_handle="R", children=["A"]),
            FamilyUnion("U1", father_handle="A", children=["B"]),
            FamilyUnion("U2", father_handle="B", children=["A"]),
        ]

        assert dict(resolve(people, unions)) == {"R": 0, "A": 1, "B": 2}

    def test_cycle_without_roots_falls_back(self):
        people = [
            person("A", families=["U1"], parent_families=["U2"], generation=4),
            person("B", families=["U2"], parent_families=["U1"]),
        ]
        unions = [
            FamilyUnion("U1", father_handle="A", children=["B"]),
            FamilyUnion("U2", father_handle="B", children=["A"]),
        ]

        assert dict(resolve(people, unions)) == {"A": 3, "B": 0}

    def test_unknown_family_references_are_skipped(self):
        people = [person("A", families=["MISSING", "U"]), person("C", parent_families=["U"])]
        unions = [FamilyUnion("U", father_handle="A", children=["C"])]

        assert dict(resolve(people, unions)) == {"A": 0, "C": 1}

    def test_empty_input(self):
        assert dict(resolve([], [])) == {}

    def test_result_is_read_only(self, three_generations):
        generations = resolve(*three_generations)
        with pytest.raises(TypeError):
            generations["A"] = 5

    def test_inputs_not_modified(self, three_generations):
        people, unions = three_generations
        before = (repr(people), repr(unions))

        resolve(people, unions)

        assert (repr(people), repr(unions)) == before
