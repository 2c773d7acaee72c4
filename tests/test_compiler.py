import numpy as np
import pytest

from tabsimplex import (
    ColumnRole,
    Expression,
    Goal,
    MalformedProblemError,
    Relation,
    Status,
    Term,
    compile_problem,
    constraint,
    objective,
    solve,
)


def test_maximization_layout(production_lp):
    z, constraints = production_lp
    problem = compile_problem(z, constraints, Goal.MAXIMIZE)
    assert problem.labels == ["Z", "x", "y", "z", "s1", "s2", "RHS"]
    assert [c.role for c in problem.columns] == [
        ColumnRole.OBJECTIVE,
        ColumnRole.DECISION,
        ColumnRole.DECISION,
        ColumnRole.DECISION,
        ColumnRole.SLACK,
        ColumnRole.SLACK,
        ColumnRole.VALUE,
    ]
    expected = np.array(
        [
            [0.0, 2.0, 3.0, 2.0, 1.0, 0.0, 1000.0],
            [0.0, 1.0, 1.0, 2.0, 0.0, 1.0, 800.0],
            [-1.0, 7.0, 8.0, 10.0, 0.0, 0.0, 0.0],
        ]
    )
    assert np.allclose(problem.tableau.to_numpy(), expected)
    assert problem.tableau.height == len(constraints) + 1
    assert problem.objective_rows == 1


def test_minimization_negates_objective_row(two_phase_lp):
    z, constraints = two_phase_lp
    problem = compile_problem(z, constraints, Goal.MINIMIZE)
    assert problem.labels == ["Z", "x", "y", "s1", "s2", "s3", "RHS"]
    expected = np.array(
        [
            [0.0, 1.0, 1.0, -1.0, 0.0, 0.0, 1.0],
            [0.0, 2.0, -1.0, 0.0, -1.0, 0.0, 1.0],
            [0.0, 0.0, 3.0, 0.0, 0.0, 1.0, 2.0],
            [1.0, -6.0, -3.0, 0.0, 0.0, 0.0, 0.0],
        ]
    )
    assert np.allclose(problem.tableau.to_numpy(), expected)


def test_equality_constraint_keeps_empty_slack_column():
    z = objective(Term(1, "x"))
    problem = compile_problem(
        z,
        [
            constraint(Term(1, "x"), Term(1, "y"), relation=Relation.EQUAL, rhs=4),
            constraint(Term(1, "y"), relation=Relation.LESS_EQUAL, rhs=3),
        ],
    )
    assert problem.labels == ["Z", "x", "y", "s1", "s2", "RHS"]
    assert list(problem.tableau.column(problem.column_index("s1"))) == [0.0, 0.0, 0.0]
    assert list(problem.tableau.column(problem.column_index("s2"))) == [0.0, 1.0, 0.0]


def test_decision_columns_sorted_lexicographically():
    z = objective(Term(1, "b"), Term(1, "a"))
    problem = compile_problem(z, [constraint(Term(1, "c"), relation=Relation.LESS_EQUAL, rhs=1)])
    assert problem.labels == ["Z", "a", "b", "c", "s1", "RHS"]


def test_negative_rhs_is_normalized():
    z = objective(Term(1, "x"))
    problem = compile_problem(
        z, [constraint(Term(1, "x"), Term(-1, "y"), relation=Relation.LESS_EQUAL, rhs=-2)]
    )
    assert list(problem.tableau.row(0)) == [0.0, -1.0, 1.0, -1.0, 2.0]


def test_objective_constant_goes_to_rhs():
    z = objective(Term(1, "x"), constant=5.0)
    rows = [constraint(Term(1, "x"), relation=Relation.LESS_EQUAL, rhs=3)]
    maximize = compile_problem(z, rows, Goal.MAXIMIZE)
    minimize = compile_problem(z, rows, Goal.MINIMIZE)
    assert list(maximize.tableau.row(1)) == [-1.0, 1.0, 0.0, -5.0]
    assert list(minimize.tableau.row(1)) == [1.0, -1.0, 0.0, 5.0]


def test_empty_constraint_set_is_legal():
    problem = compile_problem(objective(Term(2, "x"), Term(3, "y")), [])
    assert problem.tableau.shape == (1, 4)
    assert problem.constraint_count == 0


def test_duplicate_labels_are_not_summed():
    z = objective(Term(1, "x"))
    problem = compile_problem(
        z, [constraint(Term(1, "x"), Term(2, "x"), relation=Relation.LESS_EQUAL, rhs=4)]
    )
    assert problem.labels == ["Z", "x", "s1", "RHS"]
    assert problem.tableau[0, 1] == 1.0


def test_objective_must_use_equal_relation():
    z = Expression(terms=(Term(1, "x"),), relation=Relation.LESS_EQUAL, rhs=0.0)
    with pytest.raises(MalformedProblemError):
        compile_problem(z, [])


def test_unrecognized_relation_is_malformed():
    bad = Expression(terms=(Term(1, "x"),), relation="<", rhs=1.0)
    with pytest.raises(MalformedProblemError):
        compile_problem(objective(Term(1, "x")), [bad])


def test_reserved_and_non_finite_inputs_are_malformed():
    with pytest.raises(MalformedProblemError):
        compile_problem(objective(Term(1, "RHS")), [])
    with pytest.raises(MalformedProblemError):
        compile_problem(objective(Term(float("nan"), "x")), [])
    with pytest.raises(MalformedProblemError):
        compile_problem(
            objective(Term(1, "x")),
            [constraint(Term(1, "x"), relation=Relation.LESS_EQUAL, rhs=float("inf"))],
        )


def test_malformed_problem_error_is_value_error():
    with pytest.raises(ValueError):
        Relation.from_symbol("=>")


@pytest.mark.parametrize("label", ["s1", "s12", "a1", "a3"])
def test_generated_column_labels_are_malformed(label):
    z = objective(Term(1, label), Term(1, "x"))
    rows = [
        constraint(Term(1, label), relation=Relation.LESS_EQUAL, rhs=3),
        constraint(Term(1, "x"), relation=Relation.LESS_EQUAL, rhs=2),
    ]
    with pytest.raises(MalformedProblemError, match="clashes"):
        compile_problem(z, rows)
    assert solve(z, rows).status is Status.MALFORMED


def test_labels_resembling_generated_ones_are_accepted():
    z = objective(Term(1, "s"), Term(1, "a1b"), Term(1, "slack1"))
    rows = [constraint(Term(1, "s"), Term(1, "a1b"), Term(1, "slack1"), relation=Relation.LESS_EQUAL, rhs=3)]
    problem = compile_problem(z, rows)
    assert problem.labels == ["Z", "a1b", "s", "slack1", "s1", "RHS"]
    assert len(set(problem.labels)) == len(problem.labels)
