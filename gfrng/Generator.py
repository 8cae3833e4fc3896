"""
Combined Recursive Sequence (CRS) Generator

A CRS of order k over a field F is driven by k coefficients c_i, one
constant c and a history of the k most recent values s_0..s_{k-1}
(oldest first). Each step computes

    s_k = c + c_0*s_0 + c_1*s_1 + ... + c_{k-1}*s_{k-1}

using field addition and multiplication, drops s_0 and appends s_k.
The integer encoding of s_k is one unit of output.

Over GF(2^8) each step yields one byte; GF(2^16) and GF(2^32) yield
2 and 4 bytes (little-endian).
"""

import threading
import numpy as np
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from . import BINARY_FIELDS, DEFAULT_FIELD, MAX_ORDER
from .GaloisField import FieldElement, get_field


@dataclass
class GeneratorConfig:
    """
    CRS parameters.

    Attributes:
        order: Recurrence order k (1-MAX_ORDER)
        constant: Integer encoding of the constant element
        coefficients: k coefficient encodings
        initial: k initial history values, oldest first
        field_name: Predefined binary field ('GF2_8', 'GF2_16', 'GF2_32')

    Example:
        >>> cfg = GeneratorConfig(order=2, constant=1,
        ...                       coefficients=[2, 3], initial=[5, 9])
    """

    order: int
    constant: int = 0
    coefficients: List[int] = field(default_factory=list)
    initial: List[int] = field(default_factory=list)
    field_name: str = DEFAULT_FIELD

    def __post_init__(self):
        """Validate generator parameters."""
        if self.field_name not in BINARY_FIELDS:
            raise ValueError(f"Unknown field: {self.field_name}")
        if not 1 <= self.order <= MAX_ORDER:
            raise ValueError(f"Order must be 1-{MAX_ORDER}, got {self.order}")
        if len(self.coefficients) != self.order:
            raise ValueError(f"Expected {self.order} coefficients, got {len(self.coefficients)}")
        if len(self.initial) != self.order:
            raise ValueError(f"Expected {self.order} initial values, got {len(self.initial)}")

        limit = 1 << self.degree
        for value in [self.constant, *self.coefficients, *self.initial]:
            if not 0 <= value < limit:
                raise ValueError(f"Value must be 0-{limit - 1} for {self.field_name}, got {value}")

    @property
    def degree(self) -> int:
        """Extension degree of the configured field."""
        return BINARY_FIELDS[self.field_name][0]

    @property
    def width(self) -> int:
        """Output bytes per step."""
        return BINARY_FIELDS[self.field_name][1]

    @classmethod
    def from_args(cls, args) -> 'GeneratorConfig':
        """Build from a CLI namespace (order defaults to len(coeffs))."""
        coefficients = list(args.coeffs or [])
        order = args.order if args.order is not None else len(coefficients)
        return cls(
            order=order,
            constant=args.constant,
            coefficients=coefficients,
            initial=list(args.initial or []),
            field_name=args.field,
        )


def crs_step(state: Sequence[FieldElement],
             coefficients: Sequence[FieldElement],
             constant: FieldElement) -> Tuple[FieldElement, List[FieldElement]]:
    """
    Advance a CRS by one step.

    Pure: the inputs are left untouched.

    Args:
        state: History s_0..s_{k-1}, oldest first
        coefficients: c_0..c_{k-1}
        constant: Constant term

    Returns:
        Tuple of (output, next_state) where next_state = state[1:] + [output]

    Raises:
        ValueError: If state is empty or lengths differ
        FieldMismatchError: If elements come from different fields
    """
    if len(state) == 0:
        raise ValueError("CRS state must not be empty")
    if len(state) != len(coefficients):
        raise ValueError(f"State has {len(state)} values but {len(coefficients)} coefficients")

    acc = constant.field.neutral()
    for c, s in zip(coefficients, state):
        acc = acc + c * s

    output = constant + acc
    return output, list(state[1:]) + [output]


class RecurrenceGenerator:
    """
    Stateful CRS byte generator.

    State transitions are serialized with a lock, so one generator can
    be shared between threads.

    Example:
        >>> gen = RecurrenceGenerator(GeneratorConfig(
        ...     order=2, constant=1, coefficients=[2, 3], initial=[5, 9]))
        >>> gen.read(2)
        b'\\x10#'
    """

    def __init__(self, config: GeneratorConfig):
        """
        Initialize generator.

        Args:
            config: Validated generator parameters
        """
        self.config = config
        self.field = get_field(config.field_name)
        self.width = config.width

        self.constant = self.field.from_int(config.constant)
        self.coefficients = [self.field.from_int(c) for c in config.coefficients]

        self._lock = threading.Lock()
        self._state: List[FieldElement] = []
        self.steps = 0
        self.reset()

    def reset(self) -> None:
        """Restore the initial history."""
        with self._lock:
            self._state = [self.field.from_int(v) for v in self.config.initial]
            self.steps = 0

    @property
    def state(self) -> List[int]:
        """Current history as integer encodings, oldest first."""
        with self._lock:
            return [int(s) for s in self._state]

    def next_element(self) -> FieldElement:
        """Advance one step and return the new element."""
        with self._lock:
            output, self._state = crs_step(self._state, self.coefficients, self.constant)
            self.steps += 1
            return output

    def next_value(self) -> int:
        """Advance one step and return the integer encoding."""
        return int(self.next_element())

    def generate(self, count: int) -> np.ndarray:
        """
        Generate a sequence of output values.

        Args:
            count: Number of steps

        Returns:
            numpy array of unsigned values sized to the field width
        """
        if count < 0:
            raise ValueError(f"Count must be non-negative, got {count}")
        dtype = {1: np.uint8, 2: np.uint16, 4: np.uint32}[self.width]
        return np.array([self.next_value() for _ in range(count)], dtype=dtype)

    def read(self, count: int) -> bytes:
        """
        Read `count` bytes of output.

        Each step contributes `width` little-endian bytes; the unused
        tail of the last step is discarded.
        """
        if count < 0:
            raise ValueError(f"Count must be non-negative, got {count}")

        out = bytearray()
        while len(out) < count:
            out.extend(self.next_value().to_bytes(self.width, 'little'))
        return bytes(out[:count])
