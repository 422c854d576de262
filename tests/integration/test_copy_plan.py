"""Integration test: a minimal record copier driven by the classifier.

The copier deep-copies only the fields the classifier reports, reads private
scalars through the extractor and assigns everything else.
"""

import copy
import datetime
from dataclasses import dataclass, field
from typing import Any

from clonekit import (
    TypeClassifier,
    copy_scalar_value,
    field_values,
    is_opaque_kind,
)


def copy_record(classifier: TypeClassifier, obj: Any) -> Any:
    deep = {f.name for f in classifier.classify(type(obj)).pointer_fields}
    values = {}
    for value in field_values(obj):
        if value.name in deep:
            values[value.name] = copy.deepcopy(value.raw)
        elif is_opaque_kind(value.kind):
            values[value.name] = copy_scalar_value(value).interface()
        else:
            values[value.name] = value.raw
    return type(obj)(**values)


@dataclass
class Meta:
    labels: list[str]


@dataclass
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class Currency:
    code: str


@dataclass
class Order:
    id: int
    _note: str
    at: datetime.datetime
    where: Position
    currency: Currency
    meta: Meta
    items: list[int] = field(default_factory=list)
    _hook: Any = None


def test_copy_shares_opaque_fields_and_separates_references():
    classifier = TypeClassifier()
    at = datetime.datetime(2024, 1, 1, tzinfo=datetime.UTC)
    original = Order(
        id=1,
        _note="fragile",
        at=at,
        where=Position(1.0, 2.0),
        currency=Currency("EUR"),
        meta=Meta(labels=["a"]),
        items=[1, 2],
    )

    clone = copy_record(classifier, original)

    assert clone == original
    assert clone.at is original.at
    assert clone.currency is original.currency
    assert clone.where is not original.where
    assert clone.meta is not original.meta
    assert clone.items is not original.items

    clone.where.x = 9.0
    clone.meta.labels.append("b")
    clone.items.append(3)
    assert original.where.x == 1.0
    assert original.meta.labels == ["a"]
    assert original.items == [1, 2]


def test_classification_is_reused_between_copies():
    classifier = TypeClassifier()
    order = Order(
        id=1,
        _note="",
        at=datetime.datetime.now(),
        where=Position(0, 0),
        currency=Currency("EUR"),
        meta=Meta([]),
    )

    copy_record(classifier, order)
    size = len(classifier)
    copy_record(classifier, order)

    assert len(classifier) == size
    assert [f.name for f in classifier.classify(Order).pointer_fields] == ["where", "meta", "items", "_hook"]
