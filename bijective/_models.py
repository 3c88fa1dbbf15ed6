import dataclasses
import operator
import re
from typing import Annotated, Any, get_args, get_origin

OPERATORS = {
    "eq": operator.eq,
    "ne": operator.ne,
    "lt": operator.lt,
    "le": operator.le,
    "gt": operator.gt,
    "ge": operator.ge,
    "in": lambda actual, expected: actual in expected,
    "contains": operator.contains,
}


class TypeValidator:
    pass


class MinLength(TypeValidator):
    def __init__(self, min_):
        self._min = min_

    def __call__(self, value):
        if len(value) < self._min:
            raise ValueError(f"Length {len(value)} is less than minimum {self._min}")


class OneOf(TypeValidator):
    def __init__(self, choices):
        self._choices = list(choices)

    def __call__(self, value):
        if value not in self._choices:
            choices = ", ".join(self._choices)
            raise ValueError(f"Value {value} is not one of {choices}")


class Regex(TypeValidator):
    def __init__(self, pattern: str):
        self._pattern = pattern
        self._regex = re.compile(pattern)

    def __call__(self, value: str):
        if not self._regex.fullmatch(value):
            raise ValueError(f"Value {value} does not match pattern {self._pattern}")


@dataclasses.dataclass
class BaseModel:
    @classmethod
    def init_recursive(cls, **kwargs):
        init_kwargs = {}
        for f in dataclasses.fields(cls):
            if f.name not in kwargs:
                continue

            init_kwargs[f.name] = cls._init_arg(kwargs[f.name], f.type)

        return cls(**init_kwargs)

    @classmethod
    def _init_arg(cls, value, type_hint):
        if type_hint is Any:
            return value

        origin = get_origin(type_hint)
        if origin is Annotated:
            return cls._init_arg(value, type_hint.__origin__)

        if origin is list and isinstance(value, list):
            (item_type,) = get_args(type_hint)
            return [cls._init_arg(v, item_type) for v in value]

        if origin is dict and isinstance(value, dict):
            key_type, val_type = get_args(type_hint)
            return {
                cls._init_arg(k, key_type): cls._init_arg(v, val_type)
                for k, v in value.items()
            }

        if origin is None and isinstance(value, dict):
            if issubclass(type_hint, BaseModel):
                return type_hint.init_recursive(**value)

        return value

    def __post_init__(self):
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            self._validate_field(field.name, value, field.type)

    def _validate_field(self, path, value, type_hint, metadata=()):
        if type_hint is Any:
            return

        origin = get_origin(type_hint)

        if origin is Annotated:
            base_type, *metadata = get_args(type_hint)
            self._validate_field(path, value, base_type, metadata)
            return

        if not isinstance(value, origin or type_hint):
            raise TypeError(
                f"{path}: Expected {type_hint.__name__}, got {type(value).__name__}"
            )

        for validator in metadata:
            if isinstance(validator, TypeValidator):
                try:
                    validator(value)
                except Exception as e:
                    raise ValueError(f"{path}: Invalid value") from e

        if origin is list:
            (item_type,) = get_args(type_hint)
            for idx, item in enumerate(value):
                self._validate_field(f"{path}[{idx}]", item, item_type)
        elif origin is dict:
            key_type, val_type = get_args(type_hint)
            for k, v in value.items():
                self._validate_field(f"{path}[key={k}]", k, key_type)
                self._validate_field(f"{path}[{k}]", v, val_type)


Key = Annotated[str, Regex(r"[A-Za-z_][A-Za-z0-9_-]*")]
Operator = Annotated[str, OneOf(OPERATORS)]


@dataclasses.dataclass
class Condition(BaseModel):
    key: Key
    op: Operator
    value: Any

    def __call__(self, element):
        if self.key not in element:
            return False
        return bool(OPERATORS[self.op](element[self.key], self.value))

    def __str__(self):
        return f"{self.key} {self.op} {self.value!r}"


@dataclasses.dataclass
class PredicateDesc(BaseModel):
    conditions: Annotated[list[Condition], MinLength(1)]
    description: str = ""

    def __post_init__(self):
        super().__post_init__()
        if not self.description:
            self.description = " and ".join(str(c) for c in self.conditions)

    def __call__(self, element):
        return all(condition(element) for condition in self.conditions)


@dataclasses.dataclass
class CheckDesc(BaseModel):
    elements: list[dict[str, Any]]
    predicates: Annotated[list[PredicateDesc], MinLength(1)]
    name: str = ""
