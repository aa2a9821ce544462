"""Vocabulario de teclas, distribución del teclado y despacho de acciones."""

from __future__ import annotations

from arithmetic_provider import Operation


DIGIT_PREFIX = "digit:"
OP_PREFIX = "op:"

ACTION_DECIMAL = "decimal"
ACTION_EQUALS = "equals"
ACTION_CLEAR = "clear"
ACTION_PLUS_MINUS = "plus_minus"
ACTION_PERCENT = "percent"


def digit_action(d: int) -> str:
    return f"{DIGIT_PREFIX}{d}"


def op_action(op: Operation) -> str:
    return f"{OP_PREFIX}{op.value}"


# ── Teclado en pantalla ──────────────────────────────────────────
#  Cada fila es una lista de (texto, acción, tipo_color)
#  tipo_color: "num", "op", "special", "equals"

KEYPAD = [
    [("C", ACTION_CLEAR, "special"), ("±", ACTION_PLUS_MINUS, "special"),
     ("%", ACTION_PERCENT, "special"), ("÷", op_action(Operation.DIVIDE), "op")],

    [("7", digit_action(7), "num"), ("8", digit_action(8), "num"),
     ("9", digit_action(9), "num"), ("×", op_action(Operation.MULTIPLY), "op")],

    [("4", digit_action(4), "num"), ("5", digit_action(5), "num"),
     ("6", digit_action(6), "num"), ("−", op_action(Operation.SUBTRACT), "op")],

    [("1", digit_action(1), "num"), ("2", digit_action(2), "num"),
     ("3", digit_action(3), "num"), ("+", op_action(Operation.ADD), "op")],

    [("0", digit_action(0), "num"), (".", ACTION_DECIMAL, "num"),
     ("=", ACTION_EQUALS, "equals")],
]

# El 0 ocupa dos columnas
COLUMN_SPANS = {digit_action(0): 2}


# ── Atajos de teclado ────────────────────────────────────────────

KEYBOARD_SHORTCUTS = {str(d): digit_action(d) for d in range(10)}
KEYBOARD_SHORTCUTS.update({
    ".": ACTION_DECIMAL,
    ",": ACTION_DECIMAL,
    "%": ACTION_PERCENT,
    "=": ACTION_EQUALS,
    "c": ACTION_CLEAR,
    "C": ACTION_CLEAR,
    "±": ACTION_PLUS_MINUS,
})
for _symbol in ("+", "-", "−", "*", "x", "×", "/", "÷"):
    KEYBOARD_SHORTCUTS[_symbol] = op_action(Operation.coerce(_symbol))

KEYSYM_SHORTCUTS = {
    "Return": ACTION_EQUALS,
    "KP_Enter": ACTION_EQUALS,
    "Escape": ACTION_CLEAR,
    "Delete": ACTION_CLEAR,
    "F9": ACTION_PLUS_MINUS,
}


def action_for_keysym(char: str, keysym: str) -> str | None:
    """Traduce un evento de teclado de tkinter a una acción (o None)."""
    if keysym in KEYSYM_SHORTCUTS:
        return KEYSYM_SHORTCUTS[keysym]
    return KEYBOARD_SHORTCUTS.get(char)


# ── Despacho ─────────────────────────────────────────────────────

def handle_action(model, action: str) -> str:
    """Aplica una acción al modelo y devuelve el texto de pantalla."""
    if action.startswith(DIGIT_PREFIX):
        return model.append_digit(action[len(DIGIT_PREFIX):])
    if action.startswith(OP_PREFIX):
        return model.choose_operation(Operation.coerce(action[len(OP_PREFIX):]))
    if action == ACTION_DECIMAL:
        return model.append_decimal()
    if action == ACTION_EQUALS:
        return model.calculate()
    if action == ACTION_CLEAR:
        return model.clear()
    if action == ACTION_PLUS_MINUS:
        return model.toggle_sign()
    if action == ACTION_PERCENT:
        return model.percent()
    raise ValueError(f"Acción desconocida: {action!r}")


def run_sequence(model, keys: str) -> list[tuple[str, str]]:
    """Teclea una cadena ("5+3+2=") y devuelve (tecla, pantalla) por paso.

    Los caracteres sin atajo (espacios) se ignoran.
    """
    steps = []
    for char in keys:
        action = KEYBOARD_SHORTCUTS.get(char)
        if action is None:
            continue
        steps.append((char, handle_action(model, action)))
    return steps
