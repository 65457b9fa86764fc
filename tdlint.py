#!/usr/bin/env python3
"""
tdlint - Text domain enforcement for translation calls

High-level goals:
- Parse Python source (via ast) into lightweight call records
- Validate the trailing text domain argument of the translation functions
  __, _x, _n and _nx against a configured policy
- Attach safe, position-exact autofixes where the fix is unambiguous
- Emit structured JSON (or plain text) diagnostics for CI / IDEs

The validation core is a pure function of (call, configuration); parsing,
file handling and rendering live at the edges of this module.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Dict, Optional, Tuple, Literal, Any, Mapping, Iterator
import argparse
import ast
import json
import os
import re
import sys

import yaml


__version__ = "0.1.0"

RULE_ID = "i18n-text-domain"
DEFAULT_TEXT_DOMAIN = "default"
MAX_FIX_PASSES = 10


class HostContractError(Exception):
    """Raised when a call or argument record does not honour the input contract."""


class ConfigError(Exception):
    """Raised when rule options or a configuration file are invalid."""


# ============================================================
# =============== SOURCE LOCATION & CONTEXT ==================
# ============================================================

@dataclass(frozen=True)
class SourceRange:
    file: str
    line_start: int
    col_start: int
    line_end: int
    col_end: int


def _check_range(offsets: Tuple[int, int], what: str) -> None:
    if len(offsets) != 2:
        raise HostContractError(f"{what} range must be a (start, end) pair, got {offsets!r}")
    start, end = offsets
    if start < 0 or end < start:
        raise HostContractError(f"{what} range {offsets!r} is not a valid offset span")


# ============================================================
# ==================== FUNCTION TABLE ========================
# ============================================================

@dataclass(frozen=True)
class FunctionSpec:
    name: str
    required_argument_count: int
    domain_argument_index: int

    def __post_init__(self) -> None:
        # The domain is always the trailing required argument.
        if self.domain_argument_index != self.required_argument_count - 1:
            raise ValueError(
                f"{self.name}: domain index {self.domain_argument_index} must equal "
                f"required argument count - 1 ({self.required_argument_count - 1})"
            )


TRANSLATION_FUNCTIONS: Dict[str, FunctionSpec] = {
    spec.name: spec
    for spec in (
        FunctionSpec("__", 2, 1),    # single
        FunctionSpec("_x", 3, 2),    # contextual
        FunctionSpec("_n", 4, 3),    # plural
        FunctionSpec("_nx", 5, 4),   # contextual plural
    )
}


# ============================================================
# ======================= CALL MODEL =========================
# ============================================================

@dataclass(frozen=True)
class ArgumentNode:
    """
    One positional argument of a call as handed over by the host.

    `range` holds character offsets into the analyzed source; `source` is the
    raw argument text when the host has it (used to measure quote markers).
    """
    is_literal: bool
    range: Tuple[int, int]
    value: Optional[str] = None
    source: str = ""
    location: Optional[SourceRange] = None

    def __post_init__(self) -> None:
        _check_range(self.range, "argument")
        if self.is_literal and not isinstance(self.value, str):
            raise HostContractError(
                f"literal argument at {self.range!r} carries no string value"
            )


@dataclass(frozen=True)
class CallRecord:
    function_name: Optional[str]  # None for callees that are not plain identifiers
    arguments: Tuple[ArgumentNode, ...] = ()
    range: Tuple[int, int] = (0, 0)
    location: Optional[SourceRange] = None

    def __post_init__(self) -> None:
        _check_range(self.range, "call")
        previous_end = -1
        for arg in self.arguments:
            if arg.range[0] < previous_end:
                raise HostContractError(
                    f"arguments of {self.function_name!r} are not in source order"
                )
            previous_end = arg.range[1]


@dataclass(frozen=True)
class DomainArgument:
    is_literal: bool
    value: Optional[str]
    range: Tuple[int, int]
    arguments: Tuple[ArgumentNode, ...]  # enclosing argument list, borrowed read-only
    source: str = ""


# ============================================================
# ===================== CONFIGURATION ========================
# ============================================================

_OPTION_NAMES = ("allowDefault", "allowedTextDomains")


@dataclass(frozen=True)
class RuleConfiguration:
    allow_default: bool = False
    allowed_text_domains: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(set(self.allowed_text_domains)) != len(self.allowed_text_domains):
            raise ConfigError("allowedTextDomains must not contain duplicate entries")

    @property
    def single_allowed_domain(self) -> Optional[str]:
        """The allowed domain when exactly one is configured, else None."""
        if len(self.allowed_text_domains) == 1:
            return self.allowed_text_domains[0]
        return None

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]]) -> "RuleConfiguration":
        """
        Build a configuration from rule options shaped like:

            {"allowDefault": bool, "allowedTextDomains": [str, ...]}

        Both keys are optional; any other key is rejected.
        """
        if options is None:
            return cls()
        if not isinstance(options, Mapping):
            raise ConfigError(f"rule options must be a mapping, got {type(options).__name__}")

        unknown = sorted(str(key) for key in options if key not in _OPTION_NAMES)
        if unknown:
            raise ConfigError(f"unknown rule option(s) {unknown}")

        allow_default = options.get("allowDefault", False)
        if not isinstance(allow_default, bool):
            raise ConfigError("allowDefault must be a boolean")

        domains = options.get("allowedTextDomains", [])
        if domains is None:
            domains = []
        if not isinstance(domains, (list, tuple)):
            raise ConfigError("allowedTextDomains must be a list of strings")
        if not all(isinstance(item, str) for item in domains):
            raise ConfigError("allowedTextDomains must be a list of strings")

        return cls(allow_default=allow_default, allowed_text_domains=tuple(domains))


def load_config_options(path: str) -> Dict[str, Any]:
    """
    Read rule options from a YAML (or JSON) file.

    The file may hold the options mapping directly, or nest it as
    `rules: {i18n-text-domain: {...}}`. An empty file yields no options.
    """
    try:
        with open(path, "r", encoding="utf-8") as handle:
            document = yaml.safe_load(handle)
    except FileNotFoundError:
        raise ConfigError(f"config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"could not read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"could not parse config file {path}: {exc}") from exc

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ConfigError(f"{path}: top level must be a mapping")

    if "rules" in document:
        rules = document["rules"]
        if not isinstance(rules, dict):
            raise ConfigError(f"{path}: 'rules' must be a mapping")
        options = rules.get(RULE_ID)
        if options is None:
            return {}
        if not isinstance(options, dict):
            raise ConfigError(f"{path}: options for {RULE_ID} must be a mapping")
        return dict(options)

    return dict(document)


def load_config(path: str) -> RuleConfiguration:
    return RuleConfiguration.from_options(load_config_options(path))


# ============================================================
# ================== MESSAGES & DIAGNOSTICS ==================
# ============================================================

MESSAGES: Dict[str, str] = {
    "invalidValue": "Invalid text domain '{{ textDomain }}'",
    "invalidType": "Text domain is not a string literal",
    "unnecessaryDefault": "Unnecessary default text domain",
    "missing": "Missing text domain",
    # Declared for consumers of the catalog; no branch reports it.
    "useAllowedValue": "Use one of the whitelisted text domains: {{ textDomains }}",
}

TEMPLATE_PATTERN = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")


def render_message(message_id: str, data: Optional[Mapping[str, Any]] = None) -> str:
    template = MESSAGES[message_id]
    values = data or {}

    def replace(match: re.Match[str]) -> str:
        value = values.get(match.group(1))
        return "" if value is None else str(value)

    return TEMPLATE_PATTERN.sub(replace, template)


class ValidationStatus(Enum):
    MISSING = "missing"
    INVALID_TYPE = "invalid-type"
    INVALID_VALUE = "invalid-domain"
    VALID = "valid"


FixKind = Literal["insert", "replace", "delete"]


@dataclass(frozen=True)
class Fix:
    """
    A single text edit over character offsets of the analyzed source.
    Insertions use an empty range (offset, offset).
    """
    kind: FixKind
    range: Tuple[int, int]
    text: str = ""

    def __post_init__(self) -> None:
        _check_range(self.range, "fix")
        if self.kind not in ("insert", "replace", "delete"):
            raise HostContractError(f"unknown fix kind {self.kind!r}")


@dataclass
class Diagnostic:
    message_id: str
    message: str
    location: Optional[SourceRange]
    data: Dict[str, Any] = field(default_factory=dict)
    fix: Optional[Fix] = None
    rule_id: str = RULE_ID
    severity: str = "error"


# ============================================================
# ==================== RULE EVALUATION =======================
# ============================================================

def classify_call(function_name: Optional[str]) -> Optional[FunctionSpec]:
    if not function_name:
        return None
    return TRANSLATION_FUNCTIONS.get(function_name)


def check_arity(spec: FunctionSpec, argument_count: int) -> Optional[ValidationStatus]:
    if argument_count < spec.required_argument_count:
        return ValidationStatus.MISSING
    return None


def resolve_domain(call: CallRecord, domain_index: int) -> Optional[DomainArgument]:
    """Return the argument in the domain slot, or None when the slot is empty."""
    if domain_index >= len(call.arguments):
        return None
    node = call.arguments[domain_index]
    return DomainArgument(
        is_literal=node.is_literal,
        value=node.value if node.is_literal else None,
        range=node.range,
        arguments=call.arguments,
        source=node.source,
    )


def validate_domain(value: str, config: RuleConfiguration) -> ValidationStatus:
    if value in config.allowed_text_domains:
        return ValidationStatus.VALID
    return ValidationStatus.INVALID_VALUE


@dataclass(frozen=True)
class CallOutcome:
    status: ValidationStatus
    spec: FunctionSpec
    domain: Optional[DomainArgument] = None


def evaluate_call(call: CallRecord, config: RuleConfiguration) -> Optional[CallOutcome]:
    """
    Run classifier, arity check, resolver and domain validation for one call.
    Returns None when the callee is not a translation function.
    """
    spec = classify_call(call.function_name)
    if spec is None:
        return None

    status = check_arity(spec, len(call.arguments))
    if status is not None:
        return CallOutcome(status, spec)

    domain = resolve_domain(call, spec.domain_argument_index)
    if domain is None or not domain.is_literal:
        return CallOutcome(ValidationStatus.INVALID_TYPE, spec, domain)

    return CallOutcome(validate_domain(domain.value, config), spec, domain)


# ============================================================
# ======================= AUTOFIXES ==========================
# ============================================================

_LITERAL_OPENING = re.compile(r"^[rRuU]*('''|\"\"\"|'|\")")


def _quote_widths(source: str) -> Optional[Tuple[int, int]]:
    """
    Width of the opening (prefix + quote) and closing quote markers of a
    literal, or None when the text is not a single plain literal piece
    (implicit concatenation, escaped quotes). Without host text the markers
    are assumed to be one character each.
    """
    if not source:
        return 1, 1
    match = _LITERAL_OPENING.match(source)
    if not match:
        return None
    quote = match.group(1)
    opening = len(match.group(0))
    if len(source) < opening + len(quote) or not source.endswith(quote):
        return None
    if quote in source[opening:len(source) - len(quote)]:
        return None
    return opening, len(quote)


def insertion_fix(call: CallRecord, config: RuleConfiguration) -> Optional[Fix]:
    domain = config.single_allowed_domain
    if domain is None or not call.arguments:
        return None
    offset = call.arguments[-1].range[1]
    # A bare generator argument shares the call's closing parenthesis.
    if offset >= call.range[1]:
        return None
    return Fix("insert", (offset, offset), f", '{domain}'")


def replacement_fix(domain: DomainArgument, config: RuleConfiguration) -> Optional[Fix]:
    allowed = config.single_allowed_domain
    if allowed is None:
        return None
    start, end = domain.range
    widths = _quote_widths(domain.source)
    if widths is None:
        return Fix("replace", (start, end), f"'{allowed}'")
    opening, closing = widths
    return Fix("replace", (start + opening, end - closing), allowed)


def removal_fix(domain: DomainArgument) -> Fix:
    start, end = domain.range
    previous = next(
        (arg for arg in reversed(domain.arguments) if arg.range[1] < start),
        None,
    )
    if previous is None:
        raise HostContractError(
            f"no argument precedes the text domain at {domain.range!r}"
        )
    return Fix("delete", (previous.range[1], end))


# ============================================================
# ====================== REPORTING ===========================
# ============================================================

def _diagnostic(
    call: CallRecord,
    message_id: str,
    *,
    data: Optional[Dict[str, Any]] = None,
    fix: Optional[Fix] = None,
) -> Diagnostic:
    data = dict(data or {})
    return Diagnostic(
        message_id=message_id,
        message=render_message(message_id, data),
        location=call.location,
        data=data,
        fix=fix,
    )


def report(call: CallRecord, outcome: CallOutcome, config: RuleConfiguration) -> Optional[Diagnostic]:
    status = outcome.status

    if status is ValidationStatus.MISSING:
        if config.allow_default:
            return None
        return _diagnostic(call, "missing", fix=insertion_fix(call, config))

    if status is ValidationStatus.INVALID_TYPE:
        return _diagnostic(call, "invalidType")

    if status is ValidationStatus.INVALID_VALUE:
        domain = outcome.domain
        if domain is None:
            raise HostContractError("invalid text domain reported without a domain argument")
        if domain.value == DEFAULT_TEXT_DOMAIN and config.allow_default:
            return _diagnostic(call, "unnecessaryDefault", fix=removal_fix(domain))
        return _diagnostic(
            call,
            "invalidValue",
            data={"textDomain": domain.value},
            fix=replacement_fix(domain, config),
        )

    return None


def check_call(call: CallRecord, config: RuleConfiguration) -> Optional[Diagnostic]:
    outcome = evaluate_call(call, config)
    if outcome is None:
        return None
    return report(call, outcome, config)


def validate(
    call: CallRecord, config: RuleConfiguration
) -> Tuple[Optional[ValidationStatus], Optional[Fix]]:
    """
    Stateless entry point: the call's status (None when skipped) and the fix
    attached to the diagnostic it would produce, if any.
    """
    outcome = evaluate_call(call, config)
    if outcome is None:
        return None, None
    diagnostic = report(call, outcome, config)
    return outcome.status, diagnostic.fix if diagnostic else None


# ============================================================
# ==================== SOURCE ADAPTER ========================
# ============================================================

_NEWLINE = re.compile(r"\r\n|\r|\n")


class SourceIndex:
    """
    Maps ast positions (1-based line, UTF-8 byte column) onto character
    offsets and 1-based character columns of the source text.
    """

    def __init__(self, text: str, filename: str = "<string>") -> None:
        self.text = text
        self.filename = filename
        self.line_starts: List[int] = [0]
        for match in _NEWLINE.finditer(text):
            self.line_starts.append(match.end())

    def offset(self, lineno: int, byte_col: int) -> int:
        if lineno < 1 or lineno > len(self.line_starts):
            raise HostContractError(f"line {lineno} is outside {self.filename}")
        start = self.line_starts[lineno - 1]
        line = self.text[start:start + byte_col]
        # byte_col >= char count, so the slice always covers the prefix.
        prefix = line.encode("utf-8")[:byte_col].decode("utf-8", errors="ignore")
        return start + len(prefix)

    def column(self, offset: int, lineno: int) -> int:
        return offset - self.line_starts[lineno - 1] + 1

    def node_span(self, node: ast.AST) -> Tuple[Tuple[int, int], SourceRange]:
        end_lineno = getattr(node, "end_lineno", None)
        end_col = getattr(node, "end_col_offset", None)
        if end_lineno is None or end_col is None:
            raise HostContractError(
                f"{type(node).__name__} node in {self.filename} has no position information"
            )
        start = self.offset(node.lineno, node.col_offset)
        end = self.offset(end_lineno, end_col)
        location = SourceRange(
            file=self.filename,
            line_start=node.lineno,
            col_start=self.column(start, node.lineno),
            line_end=end_lineno,
            col_end=self.column(end, end_lineno),
        )
        return (start, end), location


def _argument_from_node(node: ast.expr, index: SourceIndex) -> ArgumentNode:
    offsets, location = index.node_span(node)
    is_literal = isinstance(node, ast.Constant) and isinstance(node.value, str)
    return ArgumentNode(
        is_literal=is_literal,
        range=offsets,
        value=node.value if is_literal else None,
        source=index.text[offsets[0]:offsets[1]],
        location=location,
    )


def _call_from_node(node: ast.Call, index: SourceIndex) -> CallRecord:
    offsets, location = index.node_span(node)
    name = node.func.id if isinstance(node.func, ast.Name) else None
    return CallRecord(
        function_name=name,
        arguments=tuple(_argument_from_node(arg, index) for arg in node.args),
        range=offsets,
        location=location,
    )


def collect_calls(text: str, filename: str = "<string>") -> List[CallRecord]:
    """
    Parse Python source and return a record for every call, in source order.
    Raises SyntaxError when the source does not parse.
    """
    tree = ast.parse(text, filename=filename)
    index = SourceIndex(text, filename)
    calls = [
        _call_from_node(node, index)
        for node in ast.walk(tree)
        if isinstance(node, ast.Call)
    ]
    calls.sort(key=lambda call: (call.range[0], -call.range[1]))
    return calls


def lint_source(
    text: str,
    config: RuleConfiguration,
    filename: str = "<string>",
) -> List[Diagnostic]:
    diagnostics: List[Diagnostic] = []
    for call in collect_calls(text, filename):
        diagnostic = check_call(call, config)
        if diagnostic is not None:
            diagnostics.append(diagnostic)
    return diagnostics


# ============================================================
# ==================== FIX APPLICATION =======================
# ============================================================

def apply_fixes(text: str, fixes: List[Fix]) -> Tuple[str, int]:
    """
    Apply fixes in offset order. A fix that starts at or before the end of
    the previously applied one is left for a later pass.
    Returns (new_text, applied_count).
    """
    pieces: List[str] = []
    cursor = 0
    last_end = -1
    applied = 0
    for fix in sorted(fixes, key=lambda f: f.range):
        start, end = fix.range
        if start <= last_end:
            continue
        if end > len(text):
            raise HostContractError(f"fix range {fix.range!r} exceeds source length {len(text)}")
        pieces.append(text[cursor:start])
        pieces.append(fix.text)
        cursor = end
        last_end = end
        applied += 1
    pieces.append(text[cursor:])
    return "".join(pieces), applied


def fix_source(
    text: str,
    config: RuleConfiguration,
    filename: str = "<string>",
) -> Tuple[str, List[Diagnostic]]:
    """
    Repeatedly lint and apply fixes until nothing is fixable (or the pass
    limit is hit). Returns the fixed text and the diagnostics that remain.

    A pass is rolled back when its output no longer parses or when it does
    not resolve at least one diagnostic; fixing stops there.
    """
    diagnostics = lint_source(text, config, filename)
    for _ in range(MAX_FIX_PASSES):
        fixes = [d.fix for d in diagnostics if d.fix is not None]
        if not fixes:
            break
        fixed, applied = apply_fixes(text, fixes)
        if not applied:
            break
        try:
            remaining = lint_source(fixed, config, filename)
        except (SyntaxError, ValueError) as exc:
            sys.stderr.write(
                f"[tdlint] Discarding fixes for {filename}: result does not parse ({exc})\n"
            )
            break
        if len(remaining) >= len(diagnostics):
            break
        text, diagnostics = fixed, remaining
    return text, diagnostics


# ============================================================
# ======================= FILE DRIVER ========================
# ============================================================

_SKIP_DIRS = {"__pycache__", "node_modules", "build", "dist"}


def iter_source_files(paths: List[str]) -> Iterator[str]:
    for path in paths:
        if os.path.isdir(path):
            for root, dirs, files in os.walk(path):
                dirs[:] = sorted(d for d in dirs if d not in _SKIP_DIRS and not d.startswith("."))
                for name in sorted(files):
                    if name.endswith(".py"):
                        yield os.path.join(root, name)
        elif os.path.isfile(path):
            yield path
        else:
            sys.stderr.write(f"[tdlint] Source path not found: {path}\n")


def check_file(path: str, config: RuleConfiguration, *, fix: bool = False) -> List[Diagnostic]:
    """
    Lint a single file, optionally rewriting it with the available fixes.
    Unreadable or unparseable files are reported on stderr and skipped.
    """
    try:
        with open(path, "r", encoding="utf-8", newline="") as handle:
            text = handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        sys.stderr.write(f"[tdlint] Could not read {path}: {exc}\n")
        return []

    try:
        if not fix:
            return lint_source(text, config, path)
        fixed, diagnostics = fix_source(text, config, path)
    except (SyntaxError, ValueError) as exc:
        sys.stderr.write(f"[tdlint] Could not parse {path}: {exc}\n")
        return []

    if fixed != text:
        with open(path, "w", encoding="utf-8", newline="") as handle:
            handle.write(fixed)
    return diagnostics


# ============================================================
# ===================== DIAGNOSTIC OUTPUT ====================
# ============================================================

def diagnostic_to_json_obj(d: Diagnostic) -> Dict[str, Any]:
    """
    Convert a Diagnostic into a JSON-friendly dict with a stable field order.
    """
    location = None
    if d.location is not None:
        location = {
            "file": d.location.file,
            "line_start": d.location.line_start,
            "col_start": d.location.col_start,
            "line_end": d.location.line_end,
            "col_end": d.location.col_end,
        }
    fix = None
    if d.fix is not None:
        fix = {"kind": d.fix.kind, "range": list(d.fix.range), "text": d.fix.text}
    return {
        "rule_id": d.rule_id,
        "severity": d.severity,
        "message_id": d.message_id,
        "message": d.message,
        "location": location,
        "data": d.data,
        "fix": fix,
        "tool": "tdlint",
        "version": __version__,
    }


def format_diagnostic(d: Diagnostic) -> str:
    if d.location is None:
        where = "<unknown>"
    else:
        where = f"{d.location.file}:{d.location.line_start}:{d.location.col_start}"
    fixable = " (fixable)" if d.fix is not None else ""
    return f"{where}: {d.severity} {d.message} [{d.rule_id}/{d.message_id}]{fixable}"


def emit_diagnostics(
    diagnostics: List[Diagnostic],
    out: Optional[str] = None,
    *,
    output_format: str = "json",
) -> None:
    if output_format == "json":
        text = json.dumps([diagnostic_to_json_obj(d) for d in diagnostics], indent=2)
    else:
        text = "\n".join(format_diagnostic(d) for d in diagnostics)
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
    elif text:
        print(text)


# ============================================================
# ============================ CLI ===========================
# ============================================================

def _build_config(args: argparse.Namespace) -> RuleConfiguration:
    options: Dict[str, Any] = {}
    if args.config:
        options.update(load_config_options(args.config))
    if args.allow_default:
        options["allowDefault"] = True
    if args.allowed_text_domain:
        options["allowedTextDomains"] = list(args.allowed_text_domain)
    return RuleConfiguration.from_options(options)


def main(argv: Optional[List[str]] = None) -> int:
    """
    CLI entry point.
    Intended usage:
      tdlint check --allowed-text-domain my-plugin src/

    Exit status: 0 clean, 1 diagnostics remain, 2 configuration error.
    """
    parser = argparse.ArgumentParser(
        prog="tdlint",
        description="tdlint: text domain enforcement for translation calls",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_p = subparsers.add_parser(
        "check",
        help="Check Python sources for missing or invalid text domains.",
    )
    check_p.add_argument(
        "--config",
        metavar="CONFIG_FILE",
        help="YAML/JSON file with allowDefault / allowedTextDomains options.",
    )
    check_p.add_argument(
        "--allowed-text-domain",
        action="append",
        metavar="DOMAIN",
        help="Allowed text domain (repeatable; replaces the config file list).",
    )
    check_p.add_argument(
        "--allow-default",
        action="store_true",
        help="Accept calls that omit the text domain.",
    )
    check_p.add_argument(
        "--fix",
        action="store_true",
        help="Rewrite files with the available autofixes.",
    )
    check_p.add_argument(
        "--format",
        choices=("json", "text"),
        default="json",
        help="Output format (default: json).",
    )
    check_p.add_argument(
        "--out",
        metavar="OUT_FILE",
        help="Write diagnostics to this file instead of stdout.",
    )
    check_p.add_argument("paths", nargs="+", help="Python files or directories.")

    args = parser.parse_args(argv)

    if args.command == "check":
        try:
            config = _build_config(args)
        except ConfigError as exc:
            sys.stderr.write(f"[tdlint] Invalid configuration: {exc}\n")
            return 2

        diagnostics: List[Diagnostic] = []
        for path in iter_source_files(args.paths):
            diagnostics.extend(check_file(path, config, fix=args.fix))

        emit_diagnostics(diagnostics, out=args.out, output_format=args.format)
        return 1 if diagnostics else 0

    # unreachable if parser is correct
    return 1


if __name__ == "__main__":
    sys.exit(main())
