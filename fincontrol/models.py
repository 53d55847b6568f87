"""Ledger entities for FinControl.

Profiles, transactions and goals are plain dataclasses. Transactions are a
tagged union keyed by ``type``: :class:`IncomeTransaction` carries the
income-only attributes and :class:`ObligationTransaction` carries the
EXPENSE/DEBT-only ones, so an expense with ``is_fixed_income`` or an income
with a ``priority`` cannot be built.

Records coming from storage may use either camelCase keys (legacy local
store) or snake_case keys (database columns); :func:`transaction_from_record`
and friends accept both.
"""

from __future__ import annotations

import math
import re
from dataclasses import asdict, dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Union

DEFAULT_CATEGORY = 'Geral'


class LedgerValidationError(ValueError):
    """Raised when a record violates an entity invariant."""


class ProfileType(str, Enum):
    PERSONAL = 'PERSONAL'
    BUSINESS = 'BUSINESS'


class TransactionType(str, Enum):
    INCOME = 'INCOME'
    EXPENSE = 'EXPENSE'
    DEBT = 'DEBT'


class Frequency(str, Enum):
    FIXED = 'FIXED'
    VARIABLE = 'VARIABLE'
    TEMPORARY = 'TEMPORARY'


class Priority(str, Enum):
    LOW = 'LOW'
    MEDIUM = 'MEDIUM'
    HIGH = 'HIGH'
    CRITICAL = 'CRITICAL'


# Display order for priority breakdowns.
PRIORITY_ORDER = [Priority.CRITICAL, Priority.HIGH, Priority.MEDIUM, Priority.LOW]
OBLIGATION_TYPES = {TransactionType.EXPENSE, TransactionType.DEBT}


# ---------------------------------------------------------------------------
# Key helpers
# ---------------------------------------------------------------------------


def to_snake_case(name: str) -> str:
    return re.sub(r'[A-Z]', lambda m: f"_{m.group(0).lower()}", name)


def to_camel_case(name: str) -> str:
    return re.sub(r'_([a-z])', lambda m: m.group(1).upper(), name)


def _normalise_keys(record: Mapping[str, Any]) -> Dict[str, Any]:
    return {to_snake_case(str(key)): value for key, value in record.items()}


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and not value.strip()


def _optional_float(value: Any, name: str) -> Optional[float]:
    if _is_blank(value):
        return None
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise LedgerValidationError(f"{name} must be numeric, got {value!r}") from exc


def _optional_int(value: Any, name: str) -> Optional[int]:
    number = _optional_float(value, name)
    if number is None:
        return None
    if not math.isfinite(number) or number <= 0 or number != int(number):
        raise LedgerValidationError(f"{name} must be a positive integer, got {value!r}")
    return int(number)


def _optional_text(value: Any) -> Optional[str]:
    if _is_blank(value):
        return None
    return str(value).strip()


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {'1', 'true', 'yes', 'sim'}
    return bool(value) if not _is_blank(value) else False


def _coerce_enum(enum_cls, value: Any, default=None):
    if _is_blank(value):
        if default is None:
            raise LedgerValidationError(f"{enum_cls.__name__} is required")
        return default
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError as exc:
        allowed = ', '.join(member.value for member in enum_cls)
        raise LedgerValidationError(
            f"Invalid {enum_cls.__name__} {value!r}; expected one of {allowed}"
        ) from exc


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Profile:
    id: str
    name: str
    type: ProfileType = ProfileType.PERSONAL
    bank_account: str = ''

    def __post_init__(self) -> None:
        object.__setattr__(self, 'type', _coerce_enum(ProfileType, self.type, ProfileType.PERSONAL))
        if _is_blank(self.name):
            raise LedgerValidationError("Profile name is required")

    def to_record(self) -> Dict[str, Any]:
        record = asdict(self)
        record['type'] = self.type.value
        return record


@dataclass(frozen=True)
class Transaction:
    """Fields shared by every transaction type."""

    id: str
    profile_id: str
    name: str
    value: float
    date: str
    category: str = DEFAULT_CATEGORY
    notes: Optional[str] = None

    type = None  # overridden by subclasses

    def __post_init__(self) -> None:
        value = _optional_float(self.value, 'value')
        if value is None or not math.isfinite(value):
            raise LedgerValidationError("Transaction value is required")
        object.__setattr__(self, 'value', value)
        object.__setattr__(self, 'category', _optional_text(self.category) or DEFAULT_CATEGORY)
        object.__setattr__(self, 'notes', _optional_text(self.notes))

    @property
    def is_obligation(self) -> bool:
        return self.type in OBLIGATION_TYPES

    def to_record(self, drop_none: bool = True) -> Dict[str, Any]:
        record = {'type': self.type.value}
        for item in fields(self):
            value = getattr(self, item.name)
            record[item.name] = value.value if isinstance(value, Enum) else value
        return _drop_none(record) if drop_none else record


@dataclass(frozen=True)
class IncomeTransaction(Transaction):
    is_fixed_income: bool = False

    type = TransactionType.INCOME

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, 'is_fixed_income', _as_bool(self.is_fixed_income))


@dataclass(frozen=True)
class ObligationTransaction(Transaction):
    """An EXPENSE or a DEBT; ``kind`` tells them apart."""

    kind: TransactionType = TransactionType.EXPENSE
    frequency: Frequency = Frequency.VARIABLE
    priority: Priority = Priority.MEDIUM
    due_date: Optional[str] = None
    remaining_percentage: Optional[float] = None
    amount_paid: Optional[float] = None
    number_of_installments: Optional[int] = None
    installment_value: Optional[float] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        kind = _coerce_enum(TransactionType, self.kind)
        if kind not in OBLIGATION_TYPES:
            raise LedgerValidationError(f"Obligation kind must be EXPENSE or DEBT, got {kind.value}")
        object.__setattr__(self, 'kind', kind)
        object.__setattr__(self, 'frequency', _coerce_enum(Frequency, self.frequency, Frequency.VARIABLE))
        object.__setattr__(self, 'priority', _coerce_enum(Priority, self.priority, Priority.MEDIUM))
        object.__setattr__(self, 'due_date', _optional_text(self.due_date))

        remaining = _optional_float(self.remaining_percentage, 'remaining_percentage')
        if remaining is not None and not 0 <= remaining <= 100:
            raise LedgerValidationError(
                f"remaining_percentage must be within [0, 100], got {remaining}"
            )
        object.__setattr__(self, 'remaining_percentage', remaining)
        object.__setattr__(self, 'amount_paid', _optional_float(self.amount_paid, 'amount_paid'))
        object.__setattr__(
            self,
            'number_of_installments',
            _optional_int(self.number_of_installments, 'number_of_installments'),
        )
        object.__setattr__(
            self,
            'installment_value',
            _optional_float(self.installment_value, 'installment_value'),
        )

    @property
    def type(self) -> TransactionType:  # type: ignore[override]
        return self.kind

    def to_record(self, drop_none: bool = True) -> Dict[str, Any]:
        record = super().to_record(drop_none)
        record.pop('kind', None)
        return record


LedgerTransaction = Union[IncomeTransaction, ObligationTransaction]


@dataclass(frozen=True)
class Goal:
    id: str
    name: str
    target_amount: float
    current_amount: float = 0.0
    deadline: Optional[str] = None

    def __post_init__(self) -> None:
        if _is_blank(self.name):
            raise LedgerValidationError("Goal name is required")
        target = _optional_float(self.target_amount, 'target_amount')
        if target is None or target <= 0:
            raise LedgerValidationError("Goal target_amount must be greater than zero")
        current = _optional_float(self.current_amount, 'current_amount') or 0.0
        if current < 0:
            raise LedgerValidationError("Goal current_amount cannot be negative")
        object.__setattr__(self, 'target_amount', target)
        object.__setattr__(self, 'current_amount', current)
        object.__setattr__(self, 'deadline', _optional_text(self.deadline))

    def to_record(self, drop_none: bool = True) -> Dict[str, Any]:
        record = asdict(self)
        return _drop_none(record) if drop_none else record


# ---------------------------------------------------------------------------
# Record conversion
# ---------------------------------------------------------------------------

_INCOME_FIELDS = {item.name for item in fields(IncomeTransaction)}
_OBLIGATION_FIELDS = {item.name for item in fields(ObligationTransaction)} - {'kind'}


def profile_from_record(record: Mapping[str, Any]) -> Profile:
    data = _normalise_keys(record)
    return Profile(
        id=str(data.get('id') or ''),
        name=data.get('name'),
        type=data.get('type'),
        bank_account=_optional_text(data.get('bank_account')) or '',
    )


def transaction_from_record(record: Mapping[str, Any]) -> LedgerTransaction:
    """Build the right transaction variant from a stored record.

    Attributes that do not belong to the record's type are dropped, so a
    legacy row carrying e.g. ``priority`` on an income still loads.
    """
    data = _normalise_keys(record)
    kind = _coerce_enum(TransactionType, data.get('type'))
    data['id'] = str(data.get('id') or '')
    data['profile_id'] = str(data.get('profile_id') or '')
    if kind is TransactionType.INCOME:
        kwargs = {key: value for key, value in data.items() if key in _INCOME_FIELDS}
        return IncomeTransaction(**kwargs)
    kwargs = {key: value for key, value in data.items() if key in _OBLIGATION_FIELDS}
    return ObligationTransaction(kind=kind, **kwargs)


def goal_from_record(record: Mapping[str, Any]) -> Goal:
    data = _normalise_keys(record)
    return Goal(
        id=str(data.get('id') or ''),
        name=data.get('name'),
        target_amount=data.get('target_amount'),
        current_amount=data.get('current_amount', 0.0),
        deadline=data.get('deadline'),
    )


def with_id(entity, new_id: str):
    """Return a copy of ``entity`` carrying ``new_id``."""
    return replace(entity, id=new_id)


def camel_case_record(record: Mapping[str, Any]) -> Dict[str, Any]:
    return {to_camel_case(key): value for key, value in record.items()}


def obligations(transactions: List[LedgerTransaction]) -> List[ObligationTransaction]:
    return [txn for txn in transactions if txn.is_obligation]
