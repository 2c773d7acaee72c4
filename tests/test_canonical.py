import numpy as np
import pytest

from tabsimplex import (
    Column,
    ColumnRole,
    Goal,
    InfeasibleProblemError,
    Matrix,
    Problem,
    Relation,
    Term,
    compile_problem,
    constraint,
    drop_artificial_variables,
    get_solution,
    is_canonical,
    objective,
    optimize,
    run_phase_one,
    to_canonical_form,
)
from tabsimplex.canonical import missing_basic_rows


def test_less_equal_problem_is_canonical(production_lp):
    z, constraints = production_lp
    problem = compile_problem(z, constraints)
    assert is_canonical(problem)
    assert missing_basic_rows(problem) == []


def test_phase_one_skipped_for_canonical_problem(production_lp):
    z, constraints = production_lp
    problem = compile_problem(z, constraints)
    resolved, pivots = run_phase_one(problem)
    assert resolved is problem
    assert pivots == 0
    assert not resolved.columns_with_role(ColumnRole.ARTIFICIAL)


def test_greater_equal_rows_need_artificials(two_phase_lp):
    z, constraints = two_phase_lp
    problem = compile_problem(z, constraints, Goal.MINIMIZE)
    assert not is_canonical(problem)
    assert missing_basic_rows(problem) == [0, 1]


def test_phase_one_tableau_layout(two_phase_lp):
    z, constraints = two_phase_lp
    phase_one = to_canonical_form(compile_problem(z, constraints, Goal.MINIMIZE))
    assert phase_one.labels == ["W", "Z", "x", "y", "s1", "s2", "s3", "a1", "a2", "RHS"]
    assert phase_one.objective_rows == 2
    assert phase_one.constraint_count == 3
    tableau = phase_one.tableau.to_numpy()
    # Artificial objective row is priced out over the two covered rows.
    assert np.allclose(tableau[-1], [1, 0, 3, 0, -1, -1, 0, 0, 0, 2])
    # Real objective row is shifted right of W.
    assert np.allclose(tableau[-2], [0, 1, -6, -3, 0, 0, 0, 0, 0, 0])
    assert np.allclose(tableau[:3, 7], [1, 0, 0])
    assert np.allclose(tableau[:3, 8], [0, 1, 0])
    assert is_canonical(phase_one)


def test_phase_one_then_drop_artificials(two_phase_lp):
    z, constraints = two_phase_lp
    phase_one = to_canonical_form(compile_problem(z, constraints, Goal.MINIMIZE))
    assert optimize(phase_one) == 2
    assert get_solution(phase_one)["W"] == pytest.approx(0.0, abs=1e-12)

    phase_two = drop_artificial_variables(phase_one)
    assert phase_two.labels == ["Z", "x", "y", "s1", "s2", "s3", "RHS"]
    assert phase_two.objective_rows == 1
    assert phase_two.tableau.height == 4
    assert is_canonical(phase_two)
    assert phase_two.tableau is not phase_one.tableau


def test_infeasible_constraints_raise(infeasible_lp):
    z, constraints = infeasible_lp
    problem = compile_problem(z, constraints)
    with pytest.raises(InfeasibleProblemError) as info:
        run_phase_one(problem)
    assert info.value.infeasibility == pytest.approx(3.0)


def test_duplicate_claims_are_not_canonical():
    columns = (
        Column("Z", ColumnRole.OBJECTIVE),
        Column("x", ColumnRole.DECISION),
        Column("s1", ColumnRole.SLACK),
        Column("RHS", ColumnRole.VALUE),
    )
    tableau = Matrix.from_rows([[0.0, 1.0, 1.0, 5.0], [-1.0, 0.0, 0.0, 0.0]])
    problem = Problem(columns=columns, tableau=tableau, goal=Goal.MAXIMIZE)
    assert not is_canonical(problem)
    assert missing_basic_rows(problem) == []
    resolved, pivots = run_phase_one(problem)
    assert resolved is problem
    assert pivots == 0


def test_zero_level_artificial_is_pivoted_out():
    z = objective(Term(1, "x"), Term(1, "y"))
    constraints = [
        constraint(Term(1, "x"), Term(1, "y"), relation=Relation.EQUAL, rhs=1),
        constraint(Term(-1, "y"), relation=Relation.EQUAL, rhs=0),
    ]
    resolved, _ = run_phase_one(compile_problem(z, constraints))
    assert not resolved.columns_with_role(ColumnRole.ARTIFICIAL)
    assert is_canonical(resolved)
    optimize(resolved)
    solution = get_solution(resolved)
    assert solution["x"] == pytest.approx(1.0)
    assert solution["y"] == 0.0
    assert solution["Z"] == pytest.approx(1.0)


def test_redundant_equality_row_is_kept():
    z = objective(Term(1, "x"), Term(2, "y"))
    constraints = [
        constraint(Term(1, "x"), Term(1, "y"), relation=Relation.EQUAL, rhs=2),
        constraint(Term(1, "x"), Term(1, "y"), relation=Relation.EQUAL, rhs=2),
    ]
    resolved, _ = run_phase_one(compile_problem(z, constraints))
    assert resolved.constraint_count == 2
    assert np.allclose(list(resolved.tableau.row(1)), 0.0)
    optimize(resolved)
    solution = get_solution(resolved)
    assert solution["y"] == pytest.approx(2.0)
    assert solution["x"] == 0.0
    assert solution["Z"] == pytest.approx(4.0)


def test_to_canonical_form_requires_fresh_problem(two_phase_lp):
    z, constraints = two_phase_lp
    phase_one = to_canonical_form(compile_problem(z, constraints, Goal.MINIMIZE))
    with pytest.raises(ValueError):
        to_canonical_form(phase_one)
    with pytest.raises(ValueError):
        drop_artificial_variables(compile_problem(z, constraints, Goal.MINIMIZE))
