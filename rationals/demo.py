"""Run rational-arithmetic checks and print one boolean per check."""

import argparse
import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from .rational import InvalidArgument, Rational, parse

log = logging.getLogger(__name__)

Check = Tuple[str, Callable[[], bool]]


@dataclass
class CheckResult:
    name: str
    passed: bool


def builtin_checks() -> List[Check]:
    half = Rational(1, 2)
    third = Rational(1, 3)
    two_thirds = Rational(2, 3)

    return [
        ("sum", lambda: Rational(5, 6) == half + third),
        ("difference", lambda: Rational(1, 6) == half - third),
        ("product", lambda: Rational(1, 6) == half * third),
        ("quotient", lambda: Rational(3, 2) == half / third),
        ("negation", lambda: Rational(-1, 2) == -half),
        ("integer rendering", lambda: str(Rational(2, 1)) == "2"),
        ("negative rendering", lambda: str(Rational(-2, 4)) == "-1/2"),
        ("parsed rendering", lambda: str(parse("117/1098")) == "13/122"),
        ("ordering", lambda: half < two_thirds),
        ("range", lambda: third <= half <= two_thirds),
        ("large values", lambda: Rational(2000000000, 4000000000) == half),
        (
            "huge values",
            lambda: Rational(
                912016490186296920119201192141970416029,
                1824032980372593840238402384283940832058,
            )
            == half,
        ),
    ]


_BINARY_OPERATIONS: Dict[str, Callable[[Rational, Rational], Any]] = {
    "add": Rational.add,
    "subtract": Rational.subtract,
    "multiply": Rational.multiply,
    "divide": Rational.divide,
    "compare": Rational.compare,
}

_UNARY_OPERATIONS: Dict[str, Callable[[Rational], Any]] = {
    "negate": Rational.negate,
    "str": str,
}


def _case_check(case: Dict[str, Any], name: str) -> Callable[[], bool]:
    op = case.get("op")
    if op not in _BINARY_OPERATIONS and op not in _UNARY_OPERATIONS:
        raise ValueError(f"{name}: unknown op {op!r}")
    if "a" not in case:
        raise ValueError(f"{name}: missing operand 'a'")
    if op in _BINARY_OPERATIONS and "b" not in case:
        raise ValueError(f"{name}: op {op!r} needs operand 'b'")
    raises = bool(case.get("raises", False))
    if raises == ("expect" in case):
        raise ValueError(f"{name}: give exactly one of 'expect' or 'raises = true'")
    expected = None if raises else _expected_value(op, case["expect"], name)

    def evaluate() -> Any:
        a = parse(str(case["a"]))
        if op in _BINARY_OPERATIONS:
            return _BINARY_OPERATIONS[op](a, parse(str(case["b"])))
        return _UNARY_OPERATIONS[op](a)

    def check() -> bool:
        if raises:
            try:
                evaluate()
            except InvalidArgument:
                return True
            return False
        result = evaluate()
        if op in ("str", "compare"):
            return result == expected
        return result.equals(expected)

    return check


def _expected_value(op: str, expect: Any, name: str) -> Any:
    if op == "str":
        return str(expect)
    if op == "compare":
        if isinstance(expect, bool) or expect not in (-1, 0, 1):
            raise ValueError(f"{name}: 'expect' for compare must be -1, 0 or 1, got {expect!r}")
        return expect
    try:
        return parse(str(expect))
    except InvalidArgument as exc:
        raise ValueError(f"{name}: invalid 'expect' {expect!r}") from exc


def load_cases(path: Path) -> List[Check]:
    """Load ``[[case]]`` tables from a TOML case file."""
    with path.open("rb") as fh:
        data = tomllib.load(fh)

    cases = data.get("case", [])
    if not isinstance(cases, list):
        raise ValueError(f"{path}: 'case' must be an array of tables")

    checks: List[Check] = []
    for index, case in enumerate(cases, start=1):
        name = str(case.get("name", f"case {index}"))
        checks.append((name, _case_check(case, name)))
    log.debug("loaded %d cases from %s", len(checks), path)
    return checks


def run_checks(checks: List[Check]) -> List[CheckResult]:
    results = []
    for name, check in checks:
        passed = bool(check())
        log.debug("%s: %s", name, passed)
        results.append(CheckResult(name=name, passed=passed))
    return results


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Run rational-arithmetic checks and print one boolean per check.",
    )
    parser.add_argument("--cases", type=Path, help="TOML file with extra [[case]] checks")
    parser.add_argument("--no-builtin", action="store_true", help="Skip the built-in checks")
    parser.add_argument("--names", action="store_true", help="Prefix each result with its check name")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    checks: List[Check] = [] if args.no_builtin else builtin_checks()
    if args.cases is not None:
        if not args.cases.exists():
            raise FileNotFoundError(f"Case file not found: {args.cases}")
        checks.extend(load_cases(args.cases))

    results = run_checks(checks)
    for result in results:
        if args.names:
            print(f"{result.name}: {result.passed}")
        else:
            print(result.passed)

    failed = [result.name for result in results if not result.passed]
    log.info("%d/%d checks passed", len(results) - len(failed), len(results))
    if failed:
        log.warning("failed checks: %s", ", ".join(failed))
        return 1
    return 0
