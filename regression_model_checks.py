from decimal import Decimal
import sys

from arbitrary_precision_arithmetic import MPMathArithmetic
from arithmetic_provider import DecimalArithmetic, Operation, format_decimal, parse_decimal
from calculator_keys import (
	KEYBOARD_SHORTCUTS,
	KEYPAD,
	action_for_keysym,
	handle_action,
	run_sequence,
)
from calculator_model import STATE_IDLE, STATE_RESULT, STATE_TYPING, CalculatorModel


def _model(arbitrary: bool = False) -> CalculatorModel:
	if arbitrary:
		return CalculatorModel(MPMathArithmetic(working_digits=50))
	return CalculatorModel(DecimalArithmetic())


def _type(keys: str, *, arbitrary: bool = False) -> str:
	model = _model(arbitrary)
	run_sequence(model, keys)
	return model.display


def trace_keys(keys: str, *, arbitrary: bool = False) -> None:
	"""Imprime la pantalla tras cada tecla de la secuencia."""
	model = _model(arbitrary)
	steps = run_sequence(model, keys)

	print("Key trace")
	print(f"keys:       {keys}")
	print(f"arithmetic: {'mpmath' if arbitrary else 'decimal'}")
	if not steps:
		print("steps:      (no recognised keys)")
		return

	for i, (key, display) in enumerate(steps, start=1):
		print(f"  {i}. {key!r:>5} -> {display}")

	print(f"final state: {model.state}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	for arbitrary in (False, True):
		tag = "mpmath" if arbitrary else "decimal"
		for keys, expected in (
			("5+3+2=", "10"),
			("5÷0=", "0"),
			("50%", "0.5"),
			("0%", "0"),
			("1..2", "1.2"),
			("0.1+0.2=", "0.3"),
			("1÷3=", "0.3333333333"),
			("2÷3=", "0.6666666667"),
			("3-5=", "-2"),
			("1.5×4=", "6"),
			("5+=", "10"),
		):
			actual = _type(keys, arbitrary=arbitrary)
			expected_actual.append((f"[{tag}] {keys}", expected, actual))
			checks.append((f"[{tag}] {keys} displays {expected}", actual == expected))

	# Entrada de dígitos
	checks.append(("digits display as typed", _type("1234567") == "1234567"))
	checks.append(("leading zero is suppressed", _type("007") == "7"))
	checks.append(("typed fractional zeros are kept", _type("0.000") == "0.000"))
	checks.append((
		"digits beyond the fractional cap are ignored",
		_type("0.12345678901") == "0.1234567890",
	))
	checks.append(("decimal first seeds a zero", _type(".5") == "0.5"))
	checks.append((
		"decimal after an operator starts a new number",
		_type("7+.5=") == "7.5",
	))
	checks.append((
		"large products stay exact",
		_type("99999999999×99999999999=") == "9999999999800000000001",
	))

	# Cambio de signo
	model = _model()
	run_sequence(model, "12.5")
	before = model.display
	model.toggle_sign()
	negated = model.display
	model.toggle_sign()
	checks.append(("toggle sign negates typed value", negated == "-12.5"))
	checks.append(("toggle sign twice restores display", model.display == before))
	checks.append(("toggle sign twice restores value", model.current_value == Decimal("12.5")))

	model = _model()
	run_sequence(model, "1÷3=")
	before = model.display
	model.toggle_sign()
	model.toggle_sign()
	checks.append(("toggle sign twice restores a result", model.display == before))

	checks.append(("toggle sign keeps a trailing dot", _type("1.±5") == "-1.5"))
	checks.append(("toggle sign on zero stays unsigned", _type("±") == "0"))

	# Limpiar
	model = _model()
	run_sequence(model, "5+3")
	model.clear()
	checks.append(("clear returns display to 0", model.display == "0"))
	checks.append((
		"clear drops stored operand and operator",
		model.stored_operand is None and model.pending_operation is None,
	))
	checks.append(("clear returns to idle", model.state == STATE_IDLE))

	# Estados
	model = _model()
	checks.append(("initial state is idle", model.state == STATE_IDLE))
	model.append_digit(4)
	checks.append(("digit enters typing", model.state == STATE_TYPING))
	model.choose_operation(Operation.MULTIPLY)
	checks.append(("operator shows result state", model.state == STATE_RESULT))
	checks.append(("operator is pending", model.pending_operation is Operation.MULTIPLY))
	checks.append(("operand is stored", model.stored_operand == Decimal(4)))
	model.calculate()
	checks.append(("equals without new operand reuses display", model.display == "16"))
	checks.append((
		"equals clears the pending operation",
		model.stored_operand is None and model.pending_operation is None,
	))
	checks.append(("equals without operator is a no-op", model.calculate() == "16"))
	checks.append(("empty equals keeps idle", _type("=") == "0"))
	checks.append(("operator accepts symbols", _model().choose_operation("×") == "0"))

	# Observadores
	model = _model()
	seen: list[str] = []
	unsubscribe = model.subscribe(seen.append)
	run_sequence(model, "12+")
	unsubscribe()
	model.append_digit(3)
	checks.append(("observer sees every update", seen == ["1", "12", "12"]))
	checks.append(("unsubscribed observer is silent", model.display == "3" and len(seen) == 3))

	# Formato y análisis
	checks.append(("format drops exponent", format_decimal(Decimal("1E+3")) == "1000"))
	checks.append(("format has no separators", format_decimal(Decimal("1234567.5")) == "1234567.5"))
	checks.append(("format rounds tiny negatives to 0", format_decimal(Decimal("-0.00000000001")) == "0"))
	checks.append(("format maps NaN to 0", format_decimal(Decimal("NaN")) == "0"))
	checks.append(("format maps infinity to 0", format_decimal(Decimal("Infinity")) == "0"))
	checks.append(("parse accepts trailing dot", parse_decimal("3.") == Decimal(3)))
	checks.append(("parse accepts comma", parse_decimal("0,5") == Decimal("0.5")))
	checks.append(("parse maps garbage to 0", parse_decimal("abc") == Decimal(0)))

	# Despacho y teclado
	checks.append((
		"keypad has the nineteen keys",
		sum(len(row) for row in KEYPAD) == 19,
	))
	checks.append(("Return maps to equals", action_for_keysym("\r", "Return") == "equals"))
	checks.append(("Escape maps to clear", action_for_keysym("\x1b", "Escape") == "clear"))
	checks.append(("star maps to multiply", KEYBOARD_SHORTCUTS["*"] == "op:multiply"))
	checks.append(("unknown key maps to nothing", action_for_keysym("q", "q") is None))

	model = _model()
	for action in ("digit:9", "op:subtract", "digit:4", "equals"):
		handle_action(model, action)
	checks.append(("handle_action drives the model", model.display == "5"))

	for label, call in (
		("unknown action", lambda: handle_action(_model(), "sqrt")),
		("invalid digit", lambda: _model().append_digit(12)),
		("unknown operator", lambda: _model().choose_operation("^")),
	):
		try:
			call()
		except ValueError:
			checks.append((f"{label} raises ValueError", True))
		else:
			checks.append((f"{label} raises ValueError", False))

	failed = [name for name, ok in checks if not ok]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_model_checks.py
	#   python regression_model_checks.py --trace "5+3+2="
	#   python regression_model_checks.py --trace "0.1+0.2=" --arbitrary
	if "--trace" in sys.argv:
		try:
			keys = sys.argv[sys.argv.index("--trace") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing key sequence after --trace")

		trace_keys(keys, arbitrary="--arbitrary" in sys.argv)
	else:
		run_regressions()
