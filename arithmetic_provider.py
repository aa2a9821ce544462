"""
Aritmética decimal exacta para la calculadora de una pantalla.

Este módulo provee el enumerado de operaciones, el analizador del texto
de pantalla, el formateador de resultados y la clase DecimalArithmetic.
Los proveedores son intercambiables (ver arbitrary_precision_arithmetic).

Contrato de interfaz de un proveedor:
    - zero() -> valor
    - parse(text: str) -> valor
    - perform(op: Operation, a, b) -> valor
    - negate(value) -> valor
    - percent(value) -> valor
    - format(value) -> str
"""

from __future__ import annotations

from decimal import (
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    InvalidOperation,
    localcontext,
)
from enum import Enum


MAX_FRACTION_DIGITS = 10


class Operation(Enum):
    """Operadores binarios disponibles en el teclado."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"

    @property
    def symbol(self) -> str:
        return _SYMBOLS[self]

    @classmethod
    def coerce(cls, token) -> "Operation":
        """Acepta un miembro, su nombre ("add") o su símbolo ("+", "×")."""
        if isinstance(token, cls):
            return token
        if isinstance(token, str):
            key = token.strip().lower()
            for op in cls:
                if key == op.value:
                    return op
            if key in _ALIASES:
                return _ALIASES[key]
        raise ValueError(f"Operación desconocida: {token!r}")


_SYMBOLS = {
    Operation.ADD: "+",
    Operation.SUBTRACT: "−",
    Operation.MULTIPLY: "×",
    Operation.DIVIDE: "÷",
}

_ALIASES = {
    "+": Operation.ADD,
    "-": Operation.SUBTRACT,
    "−": Operation.SUBTRACT,
    "*": Operation.MULTIPLY,
    "x": Operation.MULTIPLY,
    "×": Operation.MULTIPLY,
    "/": Operation.DIVIDE,
    "÷": Operation.DIVIDE,
}


# ── Texto de pantalla <-> Decimal ────────────────────────────────

def parse_decimal(text: str) -> Decimal:
    """Convierte el texto de pantalla en Decimal; lo ilegible vale 0."""
    sanitized = (text or "").strip().replace(",", ".")
    try:
        value = Decimal(sanitized)
    except InvalidOperation:
        return Decimal(0)
    if not value.is_finite():
        return Decimal(0)
    return value


def format_decimal(value, max_fraction_digits: int = MAX_FRACTION_DIGITS) -> str:
    """Formatea con un máximo de decimales, sin ceros finales ni separadores.

    Redondeo al par más cercano. Nunca usa notación científica.
    Cualquier fallo de conversión devuelve "0".
    """
    try:
        if not isinstance(value, Decimal):
            value = Decimal(str(value))
        if not value.is_finite():
            return "0"

        if value.as_tuple().exponent < -max_fraction_digits:
            quantum = Decimal(1).scaleb(-max_fraction_digits)
            needed = max(1, value.adjusted() + 1) + max_fraction_digits + 2
            with localcontext() as ctx:
                ctx.prec = max(ctx.prec, needed)
                value = value.quantize(quantum, rounding=ROUND_HALF_EVEN)

        text = format(value, "f")
    except (InvalidOperation, ValueError, TypeError):
        return "0"

    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("", "-", "-0"):
        return "0"
    return text


# ── Proveedor decimal ────────────────────────────────────────────

class DecimalArithmetic:
    """Aritmética decimal exacta basada en el módulo decimal."""

    WORKING_PRECISION = 40

    def __init__(
        self,
        precision: int = WORKING_PRECISION,
        max_fraction_digits: int = MAX_FRACTION_DIGITS,
    ):
        self._context = Context(prec=max(28, precision), rounding=ROUND_HALF_EVEN)
        self._max_fraction_digits = max_fraction_digits

    @property
    def precision(self) -> int:
        return self._context.prec

    def zero(self) -> Decimal:
        return Decimal(0)

    def parse(self, text: str) -> Decimal:
        return parse_decimal(text)

    def perform(self, op: Operation, a: Decimal, b: Decimal) -> Decimal:
        ctx = self._context
        try:
            if op is Operation.ADD:
                return ctx.add(a, b)
            if op is Operation.SUBTRACT:
                return ctx.subtract(a, b)
            if op is Operation.MULTIPLY:
                return ctx.multiply(a, b)
            if op is Operation.DIVIDE:
                if b == 0:
                    return Decimal(0)
                return ctx.divide(a, b)
        except ArithmeticError:
            return Decimal(0)
        raise ValueError(f"Operación no soportada: {op!r}")

    def negate(self, value: Decimal) -> Decimal:
        return self._context.minus(value)

    def percent(self, value: Decimal) -> Decimal:
        try:
            return self._context.divide(value, Decimal(100))
        except ArithmeticError:
            return Decimal(0)

    def format(self, value: Decimal) -> str:
        return format_decimal(value, self._max_fraction_digits)
