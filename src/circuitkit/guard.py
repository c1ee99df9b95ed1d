"""
Input Guards for Entry Routines

An entry routine is reachable by callers outside the circuit's own
enforcement, so the structural invariants of its arguments (a bounded
vector's tail is zeroed, an integer fits its declared width, ...) hold only
if something checks them. This module makes that check mandatory:

- A type opts in by defining validate(self) -> ValidationResult. Any such
  type is a (virtual) subclass of Validatable.
- guard(body, predicates) wraps a routine with an ordered list of
  per-parameter predicates.
- @entry_point derives that list from the parameter annotations.

The set of checked parameters is fixed when the routine is wrapped. At call
time predicates run in declaration order and the first failure raises
ValidationFailure before the body starts; later predicates never run.
Predicates must be pure.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple, Union
import functools
import inspect
import logging
import types
import typing

from .errors import ValidationFailure

logger = logging.getLogger(__name__)


# =============================================================================
# VALIDATION RESULTS
# =============================================================================

@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one predicate: pass, or fail with a reason."""

    ok: bool
    reason: Optional[str] = None

    @classmethod
    def passed(cls) -> ValidationResult:
        return _PASSED

    @classmethod
    def failed(cls, reason: str) -> ValidationResult:
        return cls(ok=False, reason=reason)

    def __bool__(self) -> bool:
        return self.ok


_PASSED = ValidationResult(ok=True)

Predicate = Callable[[Any], Union[ValidationResult, bool]]


def ensure(condition: bool, reason: str) -> ValidationResult:
    """Pass if condition holds, otherwise fail with reason."""
    return _PASSED if condition else ValidationResult.failed(reason)


def validate_all(*values: Any) -> ValidationResult:
    """
    Validate nested values in order, stopping at the first failure.

    Values whose type is not Validatable are skipped. Composite types use
    this to delegate to their fields.
    """
    for value in values:
        if isinstance(value, Validatable):
            result = _as_result(value.validate())
            if not result.ok:
                return result
    return _PASSED


def _as_result(outcome: Union[ValidationResult, bool]) -> ValidationResult:
    if isinstance(outcome, ValidationResult):
        return outcome
    if isinstance(outcome, bool):
        return _PASSED if outcome else ValidationResult.failed("predicate returned False")
    raise TypeError(
        f"Predicate must return ValidationResult or bool, got {type(outcome).__name__}"
    )


# =============================================================================
# VALIDATABLE CAPABILITY
# =============================================================================

class Validatable(ABC):
    """
    Capability of types that can check their own structural invariants.

    Subclassing is optional: any class with a callable validate attribute
    is recognised through __subclasshook__.
    """

    __slots__ = ()

    @abstractmethod
    def validate(self) -> ValidationResult:
        """Check this value; must not mutate anything."""

    @classmethod
    def __subclasshook__(cls, subclass):
        if cls is Validatable:
            if any(callable(vars(base).get('validate')) for base in subclass.__mro__):
                return True
        return NotImplemented


def type_predicate(tp: type) -> Predicate:
    """Predicate checking that a value is a tp and that tp.validate passes."""

    def check(value: Any) -> ValidationResult:
        if not isinstance(value, tp):
            return ValidationResult.failed(
                f"expected {tp.__name__}, got {type(value).__name__}"
            )
        return _as_result(value.validate())

    check.__name__ = f"validate_{tp.__name__}"
    check.__qualname__ = check.__name__
    return check


def union_predicate(members: Tuple[Any, ...]) -> Predicate:
    """
    Predicate for a Union/Optional annotation.

    None passes when NoneType is a member. Otherwise the value must be an
    instance of one member type, and is validated when that member is
    Validatable.
    """
    classes = tuple(m for m in members if isinstance(m, type))
    allows_none = type(None) in classes
    expected = ' | '.join(m.__name__ for m in classes)

    def check(value: Any) -> ValidationResult:
        if value is None and allows_none:
            return _PASSED
        for member in classes:
            if isinstance(value, member):
                if _is_validatable_type(member):
                    return _as_result(value.validate())
                return _PASSED
        return ValidationResult.failed(
            f"expected {expected}, got {type(value).__name__}"
        )

    check.__name__ = f"validate_union_{'_'.join(m.__name__ for m in classes)}"
    check.__qualname__ = check.__name__
    return check


# =============================================================================
# GUARDED ENTRIES
# =============================================================================

@dataclass(frozen=True)
class ArgumentCheck:
    """One wired check: which parameter, and the predicate to run on it."""

    position: int
    parameter: str
    predicate: Predicate


RECEIVER_NAMES = ('self', 'cls')


def _checkable_parameters(signature: inspect.Signature):
    return [
        param for param in signature.parameters.values()
        if param.kind not in (param.VAR_POSITIONAL, param.VAR_KEYWORD)
    ]


def _receiver_offset(params) -> int:
    """1 when the first parameter is a method receiver, else 0."""
    if params and params[0].name in RECEIVER_NAMES and params[0].kind in (
        inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD
    ):
        return 1
    return 0


def _wrap(body: Callable, checks: Tuple[ArgumentCheck, ...],
          signature: inspect.Signature) -> Callable:
    entry_name = getattr(body, '__qualname__', repr(body))

    @functools.wraps(body)
    def guarded(*args, **kwargs):
        bound = signature.bind(*args, **kwargs)
        bound.apply_defaults()
        for check in checks:
            result = _as_result(check.predicate(bound.arguments[check.parameter]))
            if not result.ok:
                logger.debug("Rejected call to %s: %s (position %d): %s",
                             entry_name, check.parameter, check.position, result.reason)
                raise ValidationFailure(
                    check.position, result.reason, check.parameter, entry_name
                )
        return body(*bound.args, **bound.kwargs)

    guarded.__entry_checks__ = checks
    logger.debug("Wired entry %s with checks on %s",
                 entry_name, [c.parameter for c in checks] or 'no parameters')
    return guarded


def guard(body: Callable, predicates: Sequence[Optional[Predicate]]) -> Callable:
    """
    Wrap body so its arguments are validated before it runs.

    Args:
        body: The entry routine
        predicates: One entry per leading parameter of body, in declaration
            order, including a leading self/cls slot for methods. None
            leaves that parameter unchecked. Trailing parameters without an
            entry are unchecked.

    Returns:
        A callable with body's signature that raises ValidationFailure at
        the first failing predicate and otherwise returns body's result.

    Reported positions count the caller's arguments: a leading self or cls
    parameter is not numbered, so in def m(self, a) a rejected a is at
    position 0. The receiver itself cannot be checked.
    """
    signature = inspect.signature(body)
    params = _checkable_parameters(signature)
    if len(predicates) > len(params):
        raise TypeError(
            f"{body.__qualname__} takes {len(params)} checkable parameters "
            f"but {len(predicates)} predicates were given"
        )

    offset = _receiver_offset(params)
    if offset and predicates and predicates[0] is not None:
        raise TypeError(f"{body.__qualname__}: the {params[0].name} parameter cannot be checked")

    checks = tuple(
        ArgumentCheck(index - offset, param.name, predicate)
        for index, (param, predicate) in enumerate(zip(params, predicates))
        if predicate is not None
    )
    return _wrap(body, checks, signature)


_UNION_ORIGINS = tuple({Union, getattr(types, 'UnionType', Union)})


def _is_validatable_type(tp: Any) -> bool:
    return (
        isinstance(tp, type)
        and typing.get_origin(tp) is None
        and issubclass(tp, Validatable)
    )


def _annotation_predicate(tp: Any) -> Optional[Predicate]:
    """Predicate implied by an annotation, or None when nothing is checked."""
    if _is_validatable_type(tp):
        return type_predicate(tp)
    if typing.get_origin(tp) in _UNION_ORIGINS:
        members = typing.get_args(tp)
        if any(_is_validatable_type(m) for m in members):
            return union_predicate(members)
    return None


def entry_point(body: Optional[Callable] = None, *,
                overrides: Optional[Dict[str, Predicate]] = None):
    """
    Mark a routine as an entry point.

    Every parameter annotated with a Validatable type is checked with that
    type's validate. Optional[T] and other unions containing a Validatable
    member are checked too: None passes when allowed, and a value of a
    Validatable member is validated. overrides maps parameter names to
    explicit predicates and takes precedence over annotations.

    Usable bare (@entry_point) or with arguments
    (@entry_point(overrides={...})).
    """
    def decorate(func: Callable) -> Callable:
        signature = inspect.signature(func)
        hints = typing.get_type_hints(func)
        params = _checkable_parameters(signature)
        extra = overrides or {}

        unknown = set(extra) - {param.name for param in params}
        if unknown:
            raise TypeError(
                f"{func.__qualname__} has no parameters named {sorted(unknown)}"
            )

        predicates = []
        for param in params:
            if param.name in extra:
                predicates.append(extra[param.name])
                continue
            predicates.append(_annotation_predicate(hints.get(param.name)))
        return guard(func, predicates)

    if body is not None:
        return decorate(body)
    return decorate


def entry_checks(func: Callable) -> Tuple[ArgumentCheck, ...]:
    """Checks wired into a guarded routine (empty for plain routines)."""
    return getattr(func, '__entry_checks__', ())
