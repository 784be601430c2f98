"""
Tests for legality and propagation.

Tests:
- Candidate sets for each input combination
- Bottom-up fill order
- Apex parity against the opposite edge
- Soundness of legal sets against the truth tables
"""

import pytest

from ..engine_core.board import BoardLattice
from ..engine_core.cards import Card, GateFamily, Side
from ..engine_core.legality import LegalityEngine, propagate

from .conftest import L, H

MIXED = {Card.AND_FALSE, Card.OR_TRUE, Card.XOR_TRUE}
BOTH_TRUE = {Card.AND_TRUE, Card.OR_TRUE, Card.XOR_FALSE}
BOTH_FALSE = {Card.AND_FALSE, Card.OR_FALSE, Card.XOR_FALSE}


def rules_for(bases):
    return LegalityEngine(BoardLattice(bases))


class TestPropagate:
    """Truth tables of the three families."""

    @pytest.mark.parametrize("left,right", [(False, False), (False, True), (True, False), (True, True)])
    def test_truth_tables(self, left, right):
        assert propagate(GateFamily.AND, left, right) is (left and right)
        assert propagate(GateFamily.OR, left, right) is (left or right)
        assert propagate(GateFamily.XOR, left, right) is (left != right)


class TestCandidateSets:
    """Tests for legal_gates on the first level."""

    def test_mixed_inputs_on_top(self):
        # (0, 1) merges STATE_LOW (true from the top) and STATE_HIGH (false)
        rules = rules_for([L, H, L, H, L, H])
        assert rules.legal_gates(0, 1) == MIXED

    def test_both_true_on_top(self):
        rules = rules_for([L, L, H, H, L, H])
        assert rules.legal_gates(0, 1) == BOTH_TRUE

    def test_both_false_on_top(self):
        rules = rules_for([L, L, H, H, L, H])
        assert rules.legal_gates(2, 1) == BOTH_FALSE

    def test_bottom_reads_state_cards_inverted(self):
        rules = rules_for([L, L, H, H, L, H])
        assert rules.legal_gates(0, -1) == BOTH_FALSE
        assert rules.legal_gates(2, -1) == BOTH_TRUE
        assert rules.legal_gates(1, -1) == MIXED

    def test_base_row_and_outside_have_no_gates(self):
        rules = rules_for([L, H, L, H, L, H])
        assert rules.legal_gates(0, 0) == frozenset()
        assert rules.legal_gates(5, 1) == frozenset()
        assert rules.legal_gates(-1, 1) == frozenset()

    def test_is_legal(self):
        rules = rules_for([L, H, L, H, L, H])
        assert rules.is_legal(0, 1, Card.OR_TRUE)
        assert not rules.is_legal(0, 1, Card.AND_TRUE)
        assert not rules.is_legal(0, 1, Card.STATE_LOW)


class TestFillOrder:
    """Tests for can_accept and bottom-up ordering."""

    def test_second_level_waits_for_both_parents(self):
        board = BoardLattice([L, H, L, H, L, H])
        rules = LegalityEngine(board)

        board.place(1, 1, Card.OR_TRUE)
        # (0, 2) is now the next link of its chain but (0, 1) is still open
        assert board.is_open_slot(0, 2)
        assert not rules.can_accept(0, 2)
        assert rules.legal_gates(0, 2) == frozenset()

        board.place(0, 1, Card.OR_TRUE)
        assert rules.can_accept(0, 2)
        # Both parents OR_TRUE
        assert rules.legal_gates(0, 2) == BOTH_TRUE

    def test_occupied_slot_accepts_nothing(self):
        board = BoardLattice([L, H, L, H, L, H])
        rules = LegalityEngine(board)
        board.place(0, 1, Card.OR_TRUE)

        assert not rules.can_accept(0, 1)
        assert rules.legal_gates(0, 1) == frozenset()

    def test_gate_inputs_propagate(self):
        board = BoardLattice([L, H, L, H, L, H])
        rules = LegalityEngine(board)
        board.place(0, -1, Card.AND_FALSE)
        board.place(1, -1, Card.XOR_TRUE)

        assert rules.input_values(0, -2) == (False, True)
        assert rules.legal_gates(0, -2) == MIXED


class TestApexParity:
    """Apex slots are filtered by the opposite edge's base card."""

    def test_top_apex_keeps_true_gates_when_column_zero_is_low(self):
        rules = rules_for([L, H])
        assert rules.legal_gates(0, 1) == {Card.OR_TRUE, Card.XOR_TRUE}

    def test_top_apex_keeps_false_gates_when_column_zero_is_high(self):
        rules = rules_for([H, L])
        assert rules.legal_gates(0, 1) == {Card.AND_FALSE}

    def test_top_apex_all_false_inputs(self):
        rules = rules_for([H, H])
        assert rules.legal_gates(0, 1) == BOTH_FALSE

    def test_bottom_apex_keeps_true_gates_when_last_column_is_high(self):
        rules = rules_for([L, H])
        assert rules.legal_gates(0, -1) == {Card.OR_TRUE, Card.XOR_TRUE}

    def test_bottom_apex_keeps_false_gates_when_last_column_is_low(self):
        rules = rules_for([H, L])
        assert rules.legal_gates(0, -1) == {Card.AND_FALSE}

    def test_apex_filters_both_true_inputs(self):
        # Both inputs true from the top, column 0 is HIGH: only false gates survive
        rules = rules_for([H, L, L])
        board = rules.board
        board.place(0, 1, Card.OR_TRUE)
        board.place(1, 1, Card.OR_TRUE)
        assert rules.apex_polarity(2) is False
        assert rules.legal_gates(0, 2) == {Card.XOR_FALSE}

    def test_apex_polarity_only_at_apex(self):
        rules = rules_for([L, H, L, H, L, H])
        assert rules.apex_polarity(5) is True
        assert rules.apex_polarity(-5) is True
        assert rules.apex_polarity(4) is None


class TestSoundness:
    """Every non-empty legal set sits on an accepting slot and obeys the truth table."""

    def test_legal_sets_match_truth_table(self):
        board = BoardLattice([L, H, H, L, L, H])
        rules = LegalityEngine(board)

        # Fill both halves level by level with the first legal gate
        for side in Side:
            for x, y in board.slots(side):
                gates = rules.legal_gates(x, y)
                if not gates:
                    continue
                assert rules.can_accept(x, y)

                left, right = rules.input_values(x, y)
                if rules.apex_polarity(y) is None:
                    for gate in gates:
                        assert gate.polarity is propagate(gate.family, left, right)

                board.place(x, y, sorted(gates, key=lambda c: c.value)[0])

        # Every non-apex slot got filled
        assert board.gate_count() >= 28
