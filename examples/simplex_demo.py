"""
Example: Two-phase tableau Simplex with tabsimplex

This example walks through the three kinds of outcome the solver reports:
an optimum reached directly from a canonical tableau, an optimum that needs
Phase I, and an infeasible system. Problems are written as text and parsed
with the bundled parser.
"""

from tabsimplex import (
    Goal,
    Status,
    compile_problem,
    format_solution,
    get_solution,
    optimize,
    parse_constraint,
    parse_objective,
    print_tableau,
    simplex_problem,
    solve,
)


def example_production_plan():
    """Example: Maximize profit under resource limits (canonical start)."""
    print("=" * 60)
    print("Example 1: Production plan (maximize, <= constraints)")
    print("=" * 60)

    objective = parse_objective("Z = 7x + 8y + 10z")
    constraints = [
        parse_constraint("2x + 3y + 2z <= 1000"),
        parse_constraint("x + y + 2z <= 800"),
    ]

    print("Initial tableau:\n")
    print_tableau(compile_problem(objective, constraints, Goal.MAXIMIZE))

    problem = simplex_problem(objective, *constraints, goal=Goal.MAXIMIZE)
    pivots = optimize(problem)

    print(f"\nFinal tableau after {pivots} pivot(s):\n")
    print_tableau(problem)
    print("\nSolution:")
    print(format_solution(get_solution(problem)))
    print()


def example_diet_problem():
    """Example: Minimize cost with >= constraints (requires Phase I)."""
    print("=" * 60)
    print("Example 2: Minimize cost (two-phase)")
    print("=" * 60)

    result = solve(
        parse_objective("Z = 6x + 3y"),
        [
            parse_constraint("x + y >= 1"),
            parse_constraint("2x - y >= 1"),
            parse_constraint("3y <= 2"),
        ],
        goal=Goal.MINIMIZE,
    )
    print(f"Status: {result.status}")
    if result.status == Status.OPTIMAL:
        print(format_solution(result.solution))
        print(f"Pivots: {result.nit}")
    print()


def example_infeasible():
    """Example: Contradictory bounds are reported, not solved."""
    print("=" * 60)
    print("Example 3: Infeasible system")
    print("=" * 60)

    result = solve(
        parse_objective("Z = x"),
        [parse_constraint("x >= 5"), parse_constraint("x <= 2")],
    )
    print(f"Status: {result.status}")
    print(f"Message: {result.message}")
    print()


if __name__ == "__main__":
    print("\n" + "=" * 60)
    print("tabsimplex - Tableau Simplex Examples")
    print("=" * 60 + "\n")

    example_production_plan()
    example_diet_problem()
    example_infeasible()

    print("=" * 60)
    print("All examples completed successfully!")
    print("=" * 60)
