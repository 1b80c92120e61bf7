"""Human-readable guidance for each smell kind."""

from __future__ import annotations

from ..models import SmellKind

GENERIC_TIP = "Review the code and apply appropriate refactoring techniques."
GENERIC_DESCRIPTION = "A pattern in code that suggests a deeper problem."

REFACTORING_TIPS: dict[SmellKind, str] = {
    SmellKind.LONG_FUNCTION: (
        "Consider breaking this function into smaller, more focused functions "
        "that each handle a specific task."
    ),
    SmellKind.LARGE_CLASS: (
        "Consider using composition or splitting this class into smaller, more "
        "focused classes that follow the Single Responsibility Principle."
    ),
    SmellKind.DUPLICATE_CODE: (
        "Extract the duplicated code into a shared function that can be called "
        "from both places."
    ),
    SmellKind.PRIMITIVE_OBSESSION: (
        "Consider creating a class to encapsulate related primitive values."
    ),
    SmellKind.LONG_PARAMETER_LIST: (
        "Consider grouping related parameters into objects or using the "
        "Parameter Object pattern."
    ),
    SmellKind.INAPPROPRIATE_INTIMACY: (
        "Consider moving some functionality or creating an intermediary class "
        "to reduce coupling."
    ),
    SmellKind.GLOBAL_VARIABLES: (
        "Consider encapsulating global state in classes or passing required "
        "data explicitly through dependency injection."
    ),
    SmellKind.COMPLEX_CONDITION: (
        "Break the condition into smaller, well-named boolean variables or methods."
    ),
    SmellKind.DEEP_NESTING: (
        "Consider using early returns, guard clauses, or extracting nested "
        "logic into separate methods."
    ),
}

SMELL_DESCRIPTIONS: dict[SmellKind, str] = {
    SmellKind.LONG_FUNCTION: (
        "Functions that are too long are difficult to understand, test, and maintain."
    ),
    SmellKind.LARGE_CLASS: (
        "Classes that try to do too much violate the Single Responsibility "
        "Principle and become hard to maintain."
    ),
    SmellKind.DUPLICATE_CODE: (
        "Copy-pasted code creates maintenance problems when one instance is "
        "updated but others are forgotten."
    ),
    SmellKind.PRIMITIVE_OBSESSION: (
        "Using primitive types instead of small objects for simple tasks leads "
        "to repeated code and missed abstractions."
    ),
    SmellKind.LONG_PARAMETER_LIST: (
        "Functions with many parameters are difficult to call and understand, "
        "and often indicate missing abstractions."
    ),
    SmellKind.INAPPROPRIATE_INTIMACY: (
        "Classes that are too tightly coupled know too much about each other's "
        "internal details."
    ),
    SmellKind.GLOBAL_VARIABLES: (
        "Global state makes code harder to understand and test, and creates "
        "unexpected dependencies."
    ),
    SmellKind.COMPLEX_CONDITION: (
        "Complex conditional expressions are hard to understand and maintain."
    ),
    SmellKind.DEEP_NESTING: "Deeply nested code is difficult to follow and understand.",
}


def get_refactoring_tip(kind: SmellKind | str) -> str:
    """Refactoring suggestion for a smell kind (generic text for unknown kinds)."""
    try:
        return REFACTORING_TIPS[SmellKind(kind)]
    except ValueError:
        return GENERIC_TIP


def get_smell_description(kind: SmellKind | str) -> str:
    """Why a smell kind matters (generic text for unknown kinds)."""
    try:
        return SMELL_DESCRIPTIONS[SmellKind(kind)]
    except ValueError:
        return GENERIC_DESCRIPTION
