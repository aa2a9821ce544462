"""
Máquina de estados de la calculadora de una pantalla.

Este módulo provee la clase CalculatorModel, que convierte las pulsaciones
del teclado en el texto de pantalla y encadena operaciones de izquierda a
derecha, sin precedencia.

Contrato de interfaz:
    - append_digit(d), append_decimal(), choose_operation(op), calculate(),
      clear(), toggle_sign(), percent()  -> texto de pantalla
    - display: propiedad de solo lectura
    - subscribe(callback) -> función para cancelar la suscripción
"""

from __future__ import annotations

from arithmetic_provider import MAX_FRACTION_DIGITS, DecimalArithmetic, Operation


STATE_IDLE = "idle"
STATE_TYPING = "typing"
STATE_RESULT = "result"

_DIGITS = "0123456789"


class CalculatorModel:
    """Estado de la calculadora y las siete acciones del teclado.

    Variables de estado:
        - display: texto visible, siempre un literal decimal o "0"
        - current: valor numérico de la pantalla
        - stored: operando izquierdo pendiente (o None)
        - operation: operador pendiente (o None)
        - typing: True mientras se compone un número nuevo
        - has_decimal: True si el número en curso ya tiene punto
    """

    MAX_FRACTION_DIGITS = MAX_FRACTION_DIGITS

    def __init__(self, arithmetic=None):
        self._arithmetic = arithmetic if arithmetic is not None else DecimalArithmetic()
        self._observers: list = []
        self._reset()

    # ── Propiedades de solo lectura ──────────────────────────────

    @property
    def display(self) -> str:
        return self._display

    @property
    def current_value(self):
        return self._current

    @property
    def stored_operand(self):
        return self._stored

    @property
    def pending_operation(self) -> Operation | None:
        return self._operation

    @property
    def is_typing(self) -> bool:
        return self._typing

    @property
    def has_decimal(self) -> bool:
        return self._has_decimal

    @property
    def state(self) -> str:
        if self._typing:
            return STATE_TYPING
        if self._stored is None and self._operation is None and self._display == "0":
            return STATE_IDLE
        return STATE_RESULT

    # ── Observadores ─────────────────────────────────────────────

    def subscribe(self, callback):
        """Registra callback(display) tras cada acción. Devuelve cancelador."""
        self._observers.append(callback)

        def unsubscribe():
            if callback in self._observers:
                self._observers.remove(callback)

        return unsubscribe

    def _publish(self) -> str:
        for callback in list(self._observers):
            callback(self._display)
        return self._display

    # ── Entrada de números ───────────────────────────────────────

    def append_digit(self, d) -> str:
        digit = str(d)
        if len(digit) != 1 or digit not in _DIGITS:
            raise ValueError(f"Dígito inválido: {d!r}")

        if not self._typing:
            self._display = ""
            self._typing = True
            self._has_decimal = False

        if self._display == "0":
            if digit == "0":
                return self._publish()
            self._display = ""

        if self._fraction_digits() >= self.MAX_FRACTION_DIGITS:
            return self._publish()

        self._display += digit
        self._commit_display()
        return self._publish()

    def append_decimal(self) -> str:
        if not self._typing:
            self._display = "0"
            self._typing = True
            self._has_decimal = False

        if not self._has_decimal:
            self._display += "."
            self._has_decimal = True
        return self._publish()

    # ── Operaciones ──────────────────────────────────────────────

    def choose_operation(self, op) -> str:
        operation = Operation.coerce(op)
        if self._typing:
            self._commit_display()

        # Encadenado sin precedencia: 5 + 3 + -> 8
        if self._stored is not None and self._operation is not None:
            self._stored = self._arithmetic.perform(
                self._operation, self._stored, self._current
            )
        else:
            self._stored = self._current

        self._operation = operation
        self._typing = False
        self._has_decimal = False
        self._display = self._arithmetic.format(self._stored)
        return self._publish()

    def calculate(self) -> str:
        if self._operation is None or self._stored is None:
            return self._publish()

        self._commit_display()
        result = self._arithmetic.perform(self._operation, self._stored, self._current)
        self._display = self._arithmetic.format(result)
        self._current = result
        self._stored = None
        self._operation = None
        self._typing = False
        self._has_decimal = False
        return self._publish()

    def clear(self) -> str:
        self._reset()
        return self._publish()

    def toggle_sign(self) -> str:
        self._commit_display()
        self._current = self._arithmetic.negate(self._current)
        if self._typing:
            # Conserva lo tecleado ("1." -> "-1.") para poder seguir escribiendo
            self._display = self._negate_typed_text(self._display)
        else:
            self._display = self._arithmetic.format(self._current)
        self._sync_decimal_flag()
        return self._publish()

    def percent(self) -> str:
        self._commit_display()
        self._current = self._arithmetic.percent(self._current)
        self._display = self._arithmetic.format(self._current)
        self._sync_decimal_flag()
        return self._publish()

    # ── Auxiliares ───────────────────────────────────────────────

    def _reset(self):
        self._display = "0"
        self._current = self._arithmetic.zero()
        self._stored = None
        self._operation = None
        self._typing = False
        self._has_decimal = False

    def _commit_display(self):
        self._current = self._arithmetic.parse(self._display)

    def _fraction_digits(self) -> int:
        if "." not in self._display:
            return 0
        return len(self._display.split(".", 1)[1])

    def _negate_typed_text(self, text: str) -> str:
        if text.startswith("-"):
            return text[1:]
        if not self._current:
            return text
        return "-" + text

    def _sync_decimal_flag(self):
        self._has_decimal = self._typing and "." in self._display
