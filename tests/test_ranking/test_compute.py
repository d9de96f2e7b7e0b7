"""Tests for rank computation."""

import random
from collections import defaultdict

from tests.conftest import make_result

from standings.models import Rank
from standings.ranking.compute import compute_ranks


def ranks_by_roll(computation) -> dict[str, Rank]:
    return {a.roll_no: a.rank for a in computation.assignments}


class TestComputeRanks:
    def test_scenario_a_stable_tie_break(self, scenario_a):
        """CGPIs 9.0, 8.5, 9.0 → college ranks 1, 3, 2."""
        computation = compute_ranks(scenario_a)
        assert [a.rank.college for a in computation.assignments] == [1, 3, 2]

    def test_scenario_a_all_partitions(self, scenario_a):
        """All three share batch and branch, so every rank equals the college rank."""
        ranks = ranks_by_roll(compute_ranks(scenario_a))
        for rank in ranks.values():
            assert rank.college == rank.batch == rank.branch == rank.class_

    def test_uses_latest_semester_only(self):
        records = [
            make_result("X", [10.0, 6.0]),
            make_result("Y", [5.0, 7.0]),
        ]
        ranks = ranks_by_roll(compute_ranks(records))
        assert ranks["Y"].college == 1
        assert ranks["X"].college == 2

    def test_mixed_college(self, mixed_college):
        ranks = ranks_by_roll(compute_ranks(mixed_college))
        # College: B1 9.6, A1 9.1, A3 8.8, B3 8.8, A4 8.8, A2 7.4, B2 6.2
        assert {r: ranks[r].college for r in ranks} == {
            "B1": 1, "A1": 2, "A3": 3, "B3": 4, "A4": 5, "A2": 6, "B2": 7,
        }
        # Batch 2021: A1, A3, A4, A2; batch 2022: B1, B3, B2
        assert {r: ranks[r].batch for r in ranks} == {
            "A1": 1, "A3": 2, "A4": 3, "A2": 4, "B1": 1, "B3": 2, "B2": 3,
        }
        # (2021, CSE): A1, A2; (2021, ECE): A3, A4; (2022, CSE): B1, B3; (2022, ME): B2
        assert {r: ranks[r].branch for r in ranks} == {
            "A1": 1, "A2": 2, "A3": 1, "A4": 2, "B1": 1, "B3": 2, "B2": 1,
        }

    def test_same_branch_different_batch_ranked_separately(self):
        records = [
            make_result("A", [9.0], batch=2021, branch="CSE"),
            make_result("B", [8.0], batch=2022, branch="CSE"),
        ]
        ranks = ranks_by_roll(compute_ranks(records))
        assert ranks["A"].branch == 1
        assert ranks["B"].branch == 1

    def test_branch_equals_class(self, mixed_college):
        for assignment in compute_ranks(mixed_college).assignments:
            assert assignment.rank.branch == assignment.rank.class_

    def test_empty_input(self):
        computation = compute_ranks([])
        assert computation.assignments == []
        assert computation.malformed == []

    def test_does_not_mutate_input(self, scenario_a):
        compute_ranks(scenario_a)
        assert all(r.rank == Rank() for r in scenario_a)

    def test_rank_of(self, scenario_a):
        computation = compute_ranks(scenario_a)
        assert computation.rank_of("S2").college == 3
        assert computation.rank_of("missing") is None

    def test_shared_id_gets_separate_ranks(self):
        records = [make_result("S1", [9.0]), make_result("S1", [8.0])]
        computation = compute_ranks(records)
        assert [a.rank.college for a in computation.assignments] == [1, 2]
        assert computation.assignments[0].rank is not computation.assignments[1].rank


class TestMalformedRecords:
    def test_record_without_semesters_is_excluded(self):
        records = [
            make_result("A", [8.0]),
            make_result("EMPTY", []),
            make_result("B", [9.0]),
        ]
        computation = compute_ranks(records)
        assert [a.roll_no for a in computation.assignments] == ["A", "B"]
        assert len(computation.malformed) == 1
        bad = computation.malformed[0]
        assert bad.roll_no == "EMPTY"
        assert bad.to_dict() == {
            "id": "EMPTY", "rollNo": "EMPTY", "reason": "record has no semesters",
        }

    def test_scenario_d_one_in_a_hundred(self):
        """One of 100 records has no semesters → 99 dense college ranks."""
        records = [make_result(f"R{i:03d}", [5 + (i % 50) / 10]) for i in range(100)]
        records[42] = make_result("R042", [])
        computation = compute_ranks(records)
        assert len(computation.assignments) == 99
        assert sorted(a.rank.college for a in computation.assignments) == list(range(1, 100))
        assert [m.roll_no for m in computation.malformed] == ["R042"]


class TestProperties:
    """Properties checked over a random but seeded dataset."""

    def setup_method(self):
        rng = random.Random(1234)
        self.records = [
            make_result(
                f"P{i:03d}",
                [round(rng.uniform(4, 10), 1)],
                batch=rng.choice([2021, 2022, 2023]),
                branch=rng.choice(["CSE", "ECE", "ME"]),
            )
            for i in range(150)
        ]
        self.computation = compute_ranks(self.records)
        self.by_id = {r.id: r for r in self.records}

    def partitions(self):
        keys = {
            "college": lambda r: None,
            "batch": lambda r: r.batch,
            "branch": lambda r: (r.batch, r.branch),
            "class_": lambda r: (r.batch, r.branch),
        }
        for field, key in keys.items():
            groups = defaultdict(list)
            for a in self.computation.assignments:
                groups[key(self.by_id[a.record_id])].append(a)
            yield field, groups.values()

    def test_density(self):
        for field, groups in self.partitions():
            for group in groups:
                ranks = sorted(getattr(a.rank, field) for a in group)
                assert ranks == list(range(1, len(group) + 1)), field

    def test_ordering(self):
        for field, groups in self.partitions():
            for group in groups:
                for a in group:
                    for b in group:
                        if self.by_id[a.record_id].cgpi > self.by_id[b.record_id].cgpi:
                            assert getattr(a.rank, field) < getattr(b.rank, field)

    def test_ties_keep_input_order(self):
        position = {r.id: i for i, r in enumerate(self.records)}
        for field, groups in self.partitions():
            for group in groups:
                for a in group:
                    for b in group:
                        same = self.by_id[a.record_id].cgpi == self.by_id[b.record_id].cgpi
                        if same and position[a.record_id] < position[b.record_id]:
                            assert getattr(a.rank, field) < getattr(b.rank, field)

    def test_deterministic(self):
        again = compute_ranks(self.records)
        assert again.assignments == self.computation.assignments
