"""Proveedor aritmético con precisión de trabajo configurable (mpmath)."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation

from arithmetic_provider import MAX_FRACTION_DIGITS, Operation, format_decimal

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc


class MPMathArithmetic:
    """Aritmética con mpf evaluada siempre dentro de mp.workdps.

    Los valores se calculan con muchos más dígitos de los que se muestran,
    de modo que el redondeo a MAX_FRACTION_DIGITS oculta el error binario
    (0.1 + 0.2 se muestra como 0.3).
    """

    MIN_WORKING_DIGITS = 20

    def __init__(
        self,
        working_digits: int = 50,
        max_fraction_digits: int = MAX_FRACTION_DIGITS,
    ):
        self._working_digits = max(self.MIN_WORKING_DIGITS, working_digits)
        self._max_fraction_digits = max_fraction_digits

    @property
    def working_digits(self) -> int:
        return self._working_digits

    def zero(self):
        with mp.workdps(self._working_digits):
            return mp.mpf(0)

    def parse(self, text: str):
        sanitized = (text or "").strip().replace(",", ".")
        with mp.workdps(self._working_digits):
            try:
                value = mp.mpf(sanitized)
            except (TypeError, ValueError):
                return mp.mpf(0)
            if not mp.isfinite(value):
                return mp.mpf(0)
            return value

    def perform(self, op: Operation, a, b):
        with mp.workdps(self._working_digits):
            if op is Operation.ADD:
                return a + b
            if op is Operation.SUBTRACT:
                return a - b
            if op is Operation.MULTIPLY:
                return a * b
            if op is Operation.DIVIDE:
                if b == 0:
                    return mp.mpf(0)
                return a / b
        raise ValueError(f"Operación no soportada: {op!r}")

    def negate(self, value):
        with mp.workdps(self._working_digits):
            return -value

    def percent(self, value):
        with mp.workdps(self._working_digits):
            return value / 100

    def to_decimal(self, value) -> Decimal:
        """Convierte un mpf a Decimal con todos los dígitos de trabajo."""
        if not mp.isfinite(value):
            raise ValueError("Valor no finito")
        with mp.workdps(self._working_digits):
            return Decimal(mp.nstr(mp.mpf(value), n=self._working_digits))

    def format(self, value) -> str:
        try:
            exact = self.to_decimal(value)
        except (TypeError, ValueError, InvalidOperation):
            return "0"
        return format_decimal(exact, self._max_fraction_digits)
