"""Tests for roundrobin.py — circle method and verification."""

from cmbsg.models import Team
from cmbsg.roundrobin import (
    Matchup, Round, circle_round, generate_round_robin, padded_size, rotate,
    rounds_per_cycle, verify_round_robin,
)


def _teams(n, prefix="T"):
    return [Team(f"{prefix}{i}", f"{prefix}{i}") for i in range(1, n + 1)]


class TestRotate:
    def test_pivot_fixed(self):
        order = ["A", "B", "C", "D", "E", "F"]
        for steps in range(10):
            assert rotate(order, steps)[0] == "A"

    def test_one_step(self):
        assert rotate(["A", "B", "C", "D"], 1) == ["A", "C", "D", "B"]

    def test_entries_move_towards_front(self):
        order = ["A", "B", "C", "D", "E", "F"]
        assert rotate(order, 2) == ["A", "D", "E", "F", "B", "C"]

    def test_full_cycle_is_identity(self):
        order = ["A", "B", "C", "D", "E", "F"]
        assert rotate(order, len(order) - 1) == order

    def test_does_not_mutate(self):
        order = ["A", "B", "C", "D"]
        rotate(order, 2)
        assert order == ["A", "B", "C", "D"]

    def test_short_lists(self):
        assert rotate(["A", "B"], 3) == ["A", "B"]
        assert rotate([], 1) == []


class TestCycleSizes:
    def test_padded_size(self):
        assert padded_size(4) == 4
        assert padded_size(5) == 6

    def test_rounds_per_cycle(self):
        assert rounds_per_cycle(4) == 3
        assert rounds_per_cycle(5) == 5
        assert rounds_per_cycle(2) == 1
        assert rounds_per_cycle(1) == 0


class TestCircleRound:
    def test_even_round(self):
        teams = _teams(4)
        matchups, bye = circle_round(teams, 0)
        assert bye is None
        assert [(m.home.id, m.away.id) for m in matchups] == [("T1", "T4"), ("T2", "T3")]

    def test_second_round_follows_rotation(self):
        matchups, _ = circle_round(_teams(4), 1)
        assert [(m.home.id, m.away.id) for m in matchups] == [("T1", "T2"), ("T3", "T4")]

    def test_odd_discards_exactly_one_pairing(self):
        for n in (3, 5, 7, 9):
            teams = _teams(n)
            for r in range(rounds_per_cycle(n)):
                matchups, bye = circle_round(teams, r)
                assert len(matchups) == n // 2
                assert bye is not None
                assert all(bye.id not in (m.home.id, m.away.id) for m in matchups)


class TestGenerateRoundRobin:
    def test_even_teams(self):
        rounds = generate_round_robin(_teams(4))
        assert len(rounds) == 3
        for r in rounds:
            assert len(r.matchups) == 2
            assert r.bye_teams == []

    def test_odd_teams(self):
        rounds = generate_round_robin(_teams(5))
        assert len(rounds) == 5
        for r in rounds:
            assert len(r.matchups) == 2
            assert len(r.bye_teams) == 1

    def test_every_pair_plays_once(self):
        for n in range(2, 12):
            teams = _teams(n)
            result = verify_round_robin(generate_round_robin(teams), teams)
            assert result["valid"], (n, result["errors"])

    def test_each_team_byes_once_when_odd(self):
        teams = _teams(7)
        byes = [r.bye_teams[0].id for r in generate_round_robin(teams)]
        assert sorted(byes) == sorted(t.id for t in teams)

    def test_alternate_home_swaps_odd_rounds(self):
        teams = _teams(4)
        plain = generate_round_robin(teams)
        alt = generate_round_robin(teams, alternate_home=True)
        for r_plain, r_alt in zip(plain, alt):
            for mp, ma in zip(r_plain.matchups, r_alt.matchups):
                if (r_plain.number - 1) % 2 == 1:
                    assert (ma.home, ma.away) == (mp.away, mp.home)
                else:
                    assert (ma.home, ma.away) == (mp.home, mp.away)

    def test_two_teams(self):
        rounds = generate_round_robin(_teams(2))
        assert len(rounds) == 1
        assert len(rounds[0].matchups) == 1

    def test_one_team(self):
        assert generate_round_robin(_teams(1)) == []

    def test_empty(self):
        assert generate_round_robin([]) == []


class TestVerifyRoundRobin:
    def test_detects_missing_matchup(self):
        a, b, c = _teams(3)
        rounds = [
            Round(1, [Matchup(a, b)]),
            Round(2, [Matchup(a, c)]),
        ]
        result = verify_round_robin(rounds, [a, b, c])
        assert not result["valid"]
        assert any("T2 vs T3" in e for e in result["errors"])

    def test_detects_team_playing_twice_in_round(self):
        a, b, c = _teams(3)
        rounds = [Round(1, [Matchup(a, b), Matchup(a, c)])]
        result = verify_round_robin(rounds, [a, b, c])
        assert not result["valid"]
        assert any("T1" in e and "twice" in e for e in result["errors"])

    def test_meetings(self):
        a, b = _teams(2)
        rounds = [Round(1, [Matchup(a, b)]), Round(2, [Matchup(b, a)])]
        assert verify_round_robin(rounds, [a, b], meetings=2)["valid"]
        assert not verify_round_robin(rounds, [a, b])["valid"]
