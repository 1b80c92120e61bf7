"""Lexical smell detectors.

These detectors work on raw source text with regular expressions and brace
counting; they never see a syntax tree. They are approximate: braces inside
comments or string literals, macros and templates can all mislead them.
They run on any text without raising, and each one is a pure function of
``(content, file_name, thresholds)`` so files can be scanned in any order or
in parallel.
"""

from __future__ import annotations

import re
from collections.abc import Callable

from ...config.thresholds import ThresholdConfig
from ..models import CodeSmell, SmellKind
from .base import line_at, new_smell, truncate_snippet

LexicalDetector = Callable[[str, str, ThresholdConfig], list[CodeSmell]]

# return-type, name, parameter list
SIGNATURE_PATTERN = re.compile(r"(\w+)\s+(\w+)\s*\(([^)]*)\)")

# [const|static] type name [= value];  anchored at a line start
GLOBAL_DECLARATION_PATTERN = re.compile(
    r"^(?:const|static)?\s*(\w+)\s+(\w+)\s*(?:=\s*[^;]+)?;", re.MULTILINE
)

# Brace-balanced body up to two nested levels
_BALANCED_BODY = r"\{([^{}]*(?:\{[^{}]*(?:\{[^{}]*\}[^{}]*)*\}[^{}]*)*)\}"

FUNCTION_WITH_BODY_PATTERN = re.compile(
    r"(\w+)\s+(\w+)\s*\(([^)]*)\)\s*(?:const)?\s*" + _BALANCED_BODY
)

CLASS_BODY_PATTERN = re.compile(r"\bclass\s+(\w+)(?:\s*:\s*[^{;]+)?\s*" + _BALANCED_BODY)

MEMBER_ACCESS_PATTERN = re.compile(r"\b([A-Za-z_]\w*)(?:\.|->)([A-Za-z_]\w*)")

IF_CONDITION_START = re.compile(r"(?<![#\w])if\s*\(")

CONDITION_OPERATOR_PATTERN = re.compile(
    r"&&|\|\||==|!=|>=|<=|->|<<|>>|!|<|>|\b(?:and|or|not)\b"
)

PRIMITIVE_TYPE_PATTERN = re.compile(
    r"\b(?:int|long|short|unsigned|signed|float|double|char|bool|"
    r"w?string|string_view|size_t|u?int(?:8|16|32|64)_t)\b"
)

DOMAIN_NAME_SUFFIX = re.compile(
    r"(?:id|code|name|address|phone|email|date|time)$", re.IGNORECASE
)

_WHITESPACE = re.compile(r"\s+")

# Words that make a signature-shaped match a statement rather than a function
_STATEMENT_KEYWORDS = frozenset(
    {"return", "else", "new", "delete", "throw", "case", "goto", "co_return", "co_yield"}
)
_CONTROL_KEYWORDS = frozenset({"if", "while", "for", "switch", "catch", "sizeof", "return"})

# Words that cannot be the type of a global variable declaration
_DECLARATION_KEYWORDS = frozenset(
    {
        "class",
        "struct",
        "union",
        "enum",
        "namespace",
        "using",
        "typedef",
        "friend",
        "template",
        "return",
        "goto",
        "delete",
    }
)

_NON_FOREIGN_RECEIVERS = frozenset({"this", "std", "string"})

_NON_CONDITION_OPERATORS = frozenset({"->", "<<", ">>"})


def _is_signature(return_type: str, name: str) -> bool:
    return return_type not in _STATEMENT_KEYWORDS and name not in _CONTROL_KEYWORDS


def _split_params(params: str) -> list[str]:
    return [p.strip() for p in params.split(",") if p.strip()]


def _first_code_index(match: re.Match[str]) -> int:
    """Offset of the first non-whitespace character of a match."""
    text = match.group(0)
    return match.start() + (len(text) - len(text.lstrip()))


def detect_long_parameter_lists(
    content: str, file_name: str, thresholds: ThresholdConfig
) -> list[CodeSmell]:
    """Signatures with more parameters than the long-parameter-list band allows."""
    smells: list[CodeSmell] = []
    for match in SIGNATURE_PATTERN.finditer(content):
        return_type, name, params = match.groups()
        if not _is_signature(return_type, name):
            continue
        count = len(_split_params(params))
        severity = thresholds.long_parameter_list.severity_for(count)
        if severity is None:
            continue
        smells.append(
            new_smell(
                SmellKind.LONG_PARAMETER_LIST,
                file_name=file_name,
                line_number=line_at(content, match.start()),
                code_snippet=truncate_snippet(match.group(0), thresholds.snippet_max_chars),
                entity_name=name,
                description=f'Function "{name}" has too many parameters ({count})',
                severity=severity,
            )
        )
    return smells


def detect_global_variables(
    content: str, file_name: str, thresholds: ThresholdConfig
) -> list[CodeSmell]:
    """Variable declarations at brace depth zero.

    Depth is the running count of ``{`` minus ``}`` over all text before the
    declaration, so anything inside a namespace, class or function body is
    ignored.
    """
    smells: list[CodeSmell] = []
    depth = 0
    scanned_to = 0
    for match in GLOBAL_DECLARATION_PATTERN.finditer(content):
        preceding = content[scanned_to : match.start()]
        depth += preceding.count("{") - preceding.count("}")
        scanned_to = match.start()

        if depth != 0:
            continue
        type_name, var_name = match.groups()
        if type_name in _DECLARATION_KEYWORDS:
            continue

        smells.append(
            new_smell(
                SmellKind.GLOBAL_VARIABLES,
                file_name=file_name,
                line_number=line_at(content, _first_code_index(match)),
                code_snippet=truncate_snippet(
                    match.group(0).strip(), thresholds.snippet_max_chars
                ),
                entity_name=var_name,
                description=f'Global variable "{var_name}" detected',
                severity=thresholds.global_variable_severity,
            )
        )
    return smells


def detect_duplicate_code(
    content: str, file_name: str, thresholds: ThresholdConfig
) -> list[CodeSmell]:
    """Functions whose whitespace-normalized bodies repeat an earlier function.

    Only bodies longer than ``duplicate_code_min_chars`` after normalization
    are compared. Every repeat is reported against the first occurrence.
    """
    smells: list[CodeSmell] = []
    first_seen: dict[str, tuple[str, int]] = {}

    for match in FUNCTION_WITH_BODY_PATTERN.finditer(content):
        return_type, name, _params, body = match.groups()
        if not _is_signature(return_type, name):
            continue
        normalized = _WHITESPACE.sub(" ", body).strip()
        if len(normalized) <= thresholds.duplicate_code_min_chars:
            continue

        line = line_at(content, match.start())
        original = first_seen.get(normalized)
        if original is None:
            first_seen[normalized] = (name, line)
            continue

        original_name, original_line = original
        smells.append(
            new_smell(
                SmellKind.DUPLICATE_CODE,
                file_name=file_name,
                line_number=line,
                code_snippet=f"{name}(...) {{ ... }}",
                entity_name=name,
                description=(
                    f'Function "{name}" contains code duplicated from '
                    f'"{original_name}" (line {original_line})'
                ),
                severity=thresholds.duplicate_code_severity,
            )
        )
    return smells


def _is_domain_primitive(param: str) -> bool:
    declaration = param.split("=", 1)[0].strip()
    parts = declaration.split()
    if len(parts) < 2:
        return False
    name = parts[-1].strip("*&").split("[", 1)[0]
    type_part = " ".join(parts[:-1])
    return bool(DOMAIN_NAME_SUFFIX.search(name)) and bool(
        PRIMITIVE_TYPE_PATTERN.search(type_part)
    )


def detect_primitive_obsession(
    content: str, file_name: str, thresholds: ThresholdConfig
) -> list[CodeSmell]:
    """Signatures passing several domain values (ids, names, dates...) as primitives.

    The domain-name suffix is matched case-insensitively, so camelCase names
    such as ``userId`` or ``createdDate`` count alongside ``user_id``.
    """
    smells: list[CodeSmell] = []
    for match in SIGNATURE_PATTERN.finditer(content):
        return_type, name, params = match.groups()
        if not _is_signature(return_type, name):
            continue
        suspicious = [p for p in _split_params(params) if _is_domain_primitive(p)]
        if len(suspicious) < thresholds.primitive_obsession_min_params:
            continue
        smells.append(
            new_smell(
                SmellKind.PRIMITIVE_OBSESSION,
                file_name=file_name,
                line_number=line_at(content, match.start()),
                code_snippet=truncate_snippet(match.group(0), thresholds.snippet_max_chars),
                entity_name=name,
                description=(
                    f'Function "{name}" uses multiple primitive types that could be '
                    "an object"
                ),
                severity=thresholds.primitive_obsession_severity,
            )
        )
    return smells


def detect_inappropriate_intimacy(
    content: str, file_name: str, thresholds: ThresholdConfig
) -> list[CodeSmell]:
    """Classes that reach into one foreign object's members too often."""
    smells: list[CodeSmell] = []
    for match in CLASS_BODY_PATTERN.finditer(content):
        class_name, body = match.groups()
        references: dict[str, int] = {}
        for access in MEMBER_ACCESS_PATTERN.finditer(body):
            receiver = access.group(1)
            if receiver in _NON_FOREIGN_RECEIVERS:
                continue
            references[receiver] = references.get(receiver, 0) + 1

        line = line_at(content, match.start())
        for receiver, count in references.items():
            severity = thresholds.inappropriate_intimacy.severity_for(count)
            if severity is None:
                continue
            smells.append(
                new_smell(
                    SmellKind.INAPPROPRIATE_INTIMACY,
                    file_name=file_name,
                    line_number=line,
                    code_snippet=f"class {class_name} {{ ... }}",
                    entity_name=class_name,
                    description=(
                        f'Class "{class_name}" has inappropriate intimacy with '
                        f'"{receiver}" ({count} accesses)'
                    ),
                    severity=severity,
                )
            )
    return smells


def _condition_end(content: str, start: int) -> int:
    """Offset of the parenthesis closing the condition opened just before ``start``.

    Falls back to the end of the line for unbalanced input.
    """
    depth = 1
    for index in range(start, len(content)):
        char = content[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return index
    line_end = content.find("\n", start)
    return len(content) if line_end == -1 else line_end


def count_condition_operators(condition: str) -> int:
    """Number of logical and relational operator tokens in a condition."""
    return sum(
        1
        for token in CONDITION_OPERATOR_PATTERN.findall(condition)
        if token not in _NON_CONDITION_OPERATORS
    )


def detect_complex_conditions(
    content: str, file_name: str, thresholds: ThresholdConfig
) -> list[CodeSmell]:
    """``if`` conditions built from too many logical/relational operators."""
    smells: list[CodeSmell] = []
    for match in IF_CONDITION_START.finditer(content):
        end = _condition_end(content, match.end())
        condition = content[match.end() : end]
        count = count_condition_operators(condition)
        severity = thresholds.complex_condition.severity_for(count)
        if severity is None:
            continue
        smells.append(
            new_smell(
                SmellKind.COMPLEX_CONDITION,
                file_name=file_name,
                line_number=line_at(content, match.start()),
                code_snippet=truncate_snippet(
                    f"if ({condition.strip()})", thresholds.snippet_max_chars
                ),
                entity_name="condition",
                description=f"Complex condition with {count} operators",
                severity=severity,
            )
        )
    return smells


def detect_deep_nesting(
    content: str, file_name: str, thresholds: ThresholdConfig
) -> list[CodeSmell]:
    """Brace nesting deeper than the deep-nesting band.

    Lines are scanned in order, brace by brace. Within a top-level run (the
    counter leaving and returning to zero) the deepest level and the line
    that opened it are remembered. Closing a block at that deepest level
    reports it once; reaching a new, deeper level later in the same run
    starts a new report.
    """
    smells: list[CodeSmell] = []
    bands = thresholds.deep_nesting
    level = 0
    max_level = 0
    max_line = 0
    reported = False

    for line_number, line in enumerate(content.split("\n"), start=1):
        for char in line:
            if char == "{":
                level += 1
                if level > max_level:
                    max_level = level
                    max_line = line_number
                    reported = False
            elif char == "}":
                if level == 0:
                    continue
                if level == max_level and not reported:
                    severity = bands.severity_for(max_level)
                    if severity is not None:
                        smells.append(
                            new_smell(
                                SmellKind.DEEP_NESTING,
                                file_name=file_name,
                                line_number=max_line,
                                end_line_number=line_number,
                                code_snippet="Nested block { ... }",
                                entity_name="nested_block",
                                description=f"Deep nesting detected ({max_level} levels)",
                                severity=severity,
                            )
                        )
                    reported = True
                level -= 1
                if level == 0:
                    max_level = 0
                    reported = False
    return smells


# Registration order determines the order of findings in a result
LEXICAL_DETECTORS: tuple[LexicalDetector, ...] = (
    detect_long_parameter_lists,
    detect_global_variables,
    detect_duplicate_code,
    detect_primitive_obsession,
    detect_inappropriate_intimacy,
    detect_complex_conditions,
    detect_deep_nesting,
)


class LexicalSmellDetector:
    """Runs every lexical detector over one file's text."""

    def __init__(
        self,
        thresholds: ThresholdConfig | None = None,
        detectors: tuple[LexicalDetector, ...] = LEXICAL_DETECTORS,
    ) -> None:
        self.thresholds = thresholds or ThresholdConfig()
        self.detectors = detectors

    def detect(self, content: str, file_name: str) -> list[CodeSmell]:
        smells: list[CodeSmell] = []
        for detector in self.detectors:
            smells.extend(detector(content, file_name, self.thresholds))
        return smells
