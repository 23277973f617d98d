"""
Triangle inequality rule used by the interactive triangle builder.

Three lengths form a (non-degenerate) triangle exactly when each pair of
sides is strictly longer than the remaining side. Comparison is exact.
"""

from app.modules.triangle.schemas import TriangleInput, TriangleCheckResponse, InequalityCheck

VALID_MESSAGE = "All inequalities satisfied!"
INVALID_MESSAGE = "Sum of any two sides must be greater than the third."


def is_valid_triangle(a, b, c) -> bool:
    return a + b > c and a + c > b and b + c > a


def evaluate(sides: TriangleInput) -> TriangleCheckResponse:
    a, b, c = sides.side_a, sides.side_b, sides.side_c
    checks = [
        InequalityCheck(expression="a + b > c", left=a + b, right=c, holds=a + b > c),
        InequalityCheck(expression="a + c > b", left=a + c, right=b, holds=a + c > b),
        InequalityCheck(expression="b + c > a", left=b + c, right=a, holds=b + c > a),
    ]
    valid = is_valid_triangle(a, b, c)
    return TriangleCheckResponse(
        valid=valid,
        sides=sides,
        checks=checks,
        message=VALID_MESSAGE if valid else INVALID_MESSAGE,
    )
